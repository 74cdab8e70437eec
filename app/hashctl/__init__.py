"""hashctl - Filesystem integrity scanning and manifest comparison."""

__version__ = "0.1.0"
