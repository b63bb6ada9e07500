"""CLI module for archive-uninstall."""

from archive_uninstall.cli.main import app

__all__ = ["app"]
