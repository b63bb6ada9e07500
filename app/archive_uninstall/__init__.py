"""archive-uninstall - remove extracted archive contents from a directory."""

__version__ = "1.0.0"
