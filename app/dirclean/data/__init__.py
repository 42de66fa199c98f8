"""Bundled data files for dirclean."""
