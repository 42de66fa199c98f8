"""dirclean - Find and purge build and cache directories by name.

Cleaner profiles pair a root location with a list of directory names.
dirclean stores these profiles and removes every matching directory
beneath each profile's location.
"""

__version__ = "0.1.0"
