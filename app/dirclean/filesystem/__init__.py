"""Directory matching and removal module.

This module locates directories by name beneath a root directory and
deletes them with per-directory failure isolation.
"""

from dirclean.filesystem.matcher import DirectoryMatcher, normalize_names
from dirclean.filesystem.models import FailureSeverity, RemovalFailure, RemovalReport, ScanResult
from dirclean.filesystem.remover import DirectoryRemover, directory_size

__all__ = [
    "DirectoryMatcher",
    "DirectoryRemover",
    "FailureSeverity",
    "RemovalFailure",
    "RemovalReport",
    "ScanResult",
    "directory_size",
    "normalize_names",
]
