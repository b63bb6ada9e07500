"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape

from archive_uninstall.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


def make_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a themed console.

    Args:
        no_color: Disable colors entirely.
        stderr: Write to standard error instead of standard output.

    Returns:
        Rich Console configured with the application theme.
    """
    if no_color:
        return Console(theme=get_theme(), stderr=stderr, no_color=True, highlight=False)
    return Console(theme=get_theme(), stderr=stderr, color_system=_detect_color_system())


# Shared error console (theme loaded once at import)
err_console = make_console(stderr=True)


def print_error(message: str, console: Console | None = None) -> None:
    """Print an error message.

    Args:
        message: The message to print.
        console: Console to print to. Defaults to the shared error console.
    """
    target = console if console is not None else err_console
    target.print(f"[error]Error:[/] {escape(message)}")
