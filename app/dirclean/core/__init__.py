"""Core services for dirclean.

This package contains path management, configuration persistence,
the cleaner repository, and the consumer-facing service layer.
"""
