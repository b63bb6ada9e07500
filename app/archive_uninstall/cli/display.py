"""Verbose run report and summary.

Prints one block per file and per swept directory in the layout:

    File: dir/file.txt
          Exists : Yes
          Removed: No (file failed verification)
"""

from rich.console import Console
from rich.markup import escape

from archive_uninstall.core.outcomes import DirectoryOutcome, RemovalOutcome, SkipReason
from archive_uninstall.core.runner import RunSummary

REASONS: dict[SkipReason, str] = {
    SkipReason.VERIFICATION_FAILED: "file failed verification",
    SkipReason.NOT_FOUND: "file not found in target directory",
    SkipReason.DIR_NOT_FOUND: "directory not found in target directory",
    SkipReason.DIR_NOT_EMPTY: "directory not empty",
}

_INDENT = "      "


def format_answer(value: bool) -> str:
    """Format a yes/no answer with color markup."""
    if value:
        return "[answer.yes]Yes[/]"
    return "[answer.no]No[/]"


def format_reason(skip_reason: SkipReason | None, removed: bool, dry_run: bool) -> str:
    """Format the parenthetical reason shown after a "No" removal answer.

    Args:
        skip_reason: Why the entry was kept, if any.
        removed: Whether the entry was removed.
        dry_run: Whether the run is a dry run.

    Returns:
        The reason with a leading space, or an empty string.
    """
    if removed:
        return ""
    if skip_reason is not None:
        return f" ({REASONS[skip_reason]})"
    if dry_run:
        return " (dry run)"
    return ""


class RunReporter:
    """Reporter that prints each outcome in verbose mode.

    Attributes:
        _console: Console to print to.
        _verbose: Print per-entry blocks only when True.
        _dry_run: Whether the run is a dry run.
    """

    def __init__(self, console: Console, *, verbose: bool, dry_run: bool) -> None:
        self._console = console
        self._verbose = verbose
        self._dry_run = dry_run

    def file_outcome(self, outcome: RemovalOutcome) -> None:
        if not self._verbose:
            return
        reason = format_reason(outcome.skip_reason, outcome.removed, self._dry_run)
        self._print(f"File: [entry.file]{escape(outcome.path)}[/]")
        self._print(f"{_INDENT}Exists : {format_answer(outcome.existed)}")
        self._print(f"{_INDENT}Removed: {format_answer(outcome.removed)}{reason}")

    def directory_outcome(self, outcome: DirectoryOutcome) -> None:
        if not self._verbose:
            return
        reason = format_reason(outcome.skip_reason, outcome.removed, self._dry_run)
        self._print(f"Directory: [entry.dir]{escape(outcome.path)}[/]")
        self._print(f"{_INDENT}Exists : {format_answer(outcome.exists)}")
        self._print(f"{_INDENT}Empty  : {format_answer(outcome.empty)}")
        self._print(f"{_INDENT}Removed: {format_answer(outcome.removed)}{reason}")

    def _print(self, line: str) -> None:
        # Long paths must stay on one line
        self._console.print(line, soft_wrap=True)


def print_run_summary(console: Console, summary: RunSummary, *, dry_run: bool) -> None:
    """Print a one-line summary of the run.

    Args:
        console: Console to print to.
        summary: Collected outcomes.
        dry_run: Whether the run is a dry run.
    """
    if dry_run:
        would_remove = sum(1 for o in summary.files if o.existed and o.verified)
        parts = [f"[success]{would_remove} would be removed[/success]"]
    else:
        parts = [f"[success]{summary.removed_count} removed[/success]"]

    if summary.not_found_count:
        parts.append(f"[warning]{summary.not_found_count} not found[/warning]")
    if summary.failed_verification_count:
        parts.append(f"[error]{summary.failed_verification_count} failed verification[/error]")
    if summary.directories:
        if dry_run:
            empty = sum(1 for o in summary.directories if o.empty)
            parts.append(f"[info]{empty} empty director(ies)[/info]")
        else:
            parts.append(f"[info]{summary.removed_dir_count} director(ies) removed[/info]")

    console.print(f"\nSummary: {', '.join(parts)}")
