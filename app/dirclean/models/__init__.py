"""Data models for dirclean.

This module exports the core data structures used throughout the application.
"""

from dirclean.models.cleaner import Cleaner, Configuration

__all__ = [
    "Cleaner",
    "Configuration",
]
