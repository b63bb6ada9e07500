"""Utility functions for archive-uninstall."""

from archive_uninstall.utils.formatting import (
    err_console,
    make_console,
    print_error,
)

__all__ = [
    "err_console",
    "make_console",
    "print_error",
]
