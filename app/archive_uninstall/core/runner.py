"""Run driver.

Walks the archive once, dispatching directory entries to the tracker
and file entries to the remover, then sweeps recorded directories when
enabled. All file decisions complete before any directory is touched.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from archive_uninstall.archive.sources import open_entry_source
from archive_uninstall.core.context import RunContext
from archive_uninstall.core.directories import DirectoryTracker
from archive_uninstall.core.outcomes import DirectoryOutcome, RemovalOutcome, SkipReason
from archive_uninstall.core.remover import FileRemover

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives outcomes as soon as each decision is taken."""

    def file_outcome(self, outcome: RemovalOutcome) -> None: ...

    def directory_outcome(self, outcome: DirectoryOutcome) -> None: ...


@dataclass(slots=True)
class RunSummary:
    """Outcomes collected during a run.

    Attributes:
        files: File outcomes in archive order.
        directories: Directory outcomes in sweep order (empty without a sweep).
    """

    files: list[RemovalOutcome] = field(default_factory=list)
    directories: list[DirectoryOutcome] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        """Number of files removed."""
        return sum(1 for o in self.files if o.removed)

    @property
    def not_found_count(self) -> int:
        """Number of files missing from the target directory."""
        return sum(1 for o in self.files if o.skip_reason == SkipReason.NOT_FOUND)

    @property
    def failed_verification_count(self) -> int:
        """Number of files kept because their content differs."""
        return sum(1 for o in self.files if o.skip_reason == SkipReason.VERIFICATION_FAILED)

    @property
    def removed_dir_count(self) -> int:
        """Number of directories removed."""
        return sum(1 for o in self.directories if o.removed)


def run_uninstall(context: RunContext, reporter: Reporter | None = None) -> RunSummary:
    """Remove the archive's files (and optionally directories) from the target.

    Args:
        context: Settings of the run.
        reporter: Optional receiver of each outcome as it happens.

    Returns:
        RunSummary with every outcome.

    Raises:
        UninstallError: Any archive, verification or removal failure. The
            run stops at the first one; removals already done are kept.
    """
    summary = RunSummary()
    remover = FileRemover(context)
    tracker = DirectoryTracker(context)

    logger.info(
        "Uninstalling %s from %s (type=%s, verify=%s, dry_run=%s)",
        context.archive_path,
        context.target_dir,
        context.archive_type.value,
        context.verify,
        context.dry_run,
    )

    with open_entry_source(context.archive_path, context.archive_type) as source:
        for entry in source:
            if entry.is_dir:
                tracker.record(entry.path)
                continue
            outcome = remover.process(entry)
            summary.files.append(outcome)
            if reporter is not None:
                reporter.file_outcome(outcome)

    if context.remove_dirs:
        for dir_outcome in tracker.sweep():
            summary.directories.append(dir_outcome)
            if reporter is not None:
                reporter.directory_outcome(dir_outcome)

    logger.info(
        "Removed %d file(s) and %d directory(ies)",
        summary.removed_count,
        summary.removed_dir_count,
    )
    return summary
