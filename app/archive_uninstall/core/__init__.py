"""Core removal engine.

This module provides the run context, verification, per-file removal
decisions, directory sweeping and the run driver.
"""

from archive_uninstall.core.context import RunContext
from archive_uninstall.core.directories import DirectoryTracker, count_tree_entries
from archive_uninstall.core.outcomes import DirectoryOutcome, RemovalOutcome, SkipReason
from archive_uninstall.core.remover import FileRemover
from archive_uninstall.core.runner import Reporter, RunSummary, run_uninstall
from archive_uninstall.core.verify import digest_stream, verify

__all__ = [
    "DirectoryOutcome",
    "DirectoryTracker",
    "FileRemover",
    "RemovalOutcome",
    "Reporter",
    "RunContext",
    "RunSummary",
    "SkipReason",
    "count_tree_entries",
    "digest_stream",
    "run_uninstall",
    "verify",
]
