"""Bundled data files for hashctl."""
