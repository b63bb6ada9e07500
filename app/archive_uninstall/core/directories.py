"""Directory tracking and the post-pass sweep.

Directory entries are only recorded during the archive pass. Once every
file has been considered, the sweep visits the recorded directories in
reverse lexicographic order and removes those that are empty.

Reverse lexicographic order puts ``a/b/`` before ``a/`` so children are
usually swept before their parents. It is not a strict depth-first
order for every naming pattern.
"""

import logging
import os
import posixpath
from collections.abc import Iterator
from pathlib import Path

from archive_uninstall.core.context import RunContext
from archive_uninstall.core.outcomes import DirectoryOutcome, SkipReason
from archive_uninstall.errors import RemovalError

logger = logging.getLogger(__name__)


def count_tree_entries(path: Path) -> int:
    """Count the entries of a directory subtree, the directory included.

    Args:
        path: Directory to walk.

    Returns:
        Number of visited entries, 0 if the directory does not exist.
    """
    if not path.is_dir():
        return 0
    total = 1
    for _root, dirs, files in os.walk(path):
        total += len(dirs) + len(files)
    return total


class DirectoryTracker:
    """Records directory entries and sweeps them after the file pass.

    Attributes:
        _context: Settings of the current run.
        _recorded: Directory paths in encounter order.
        _swept: Whether the sweep has started.
    """

    def __init__(self, context: RunContext) -> None:
        """Initialize the DirectoryTracker.

        Args:
            context: Settings of the current run.
        """
        self._context = context
        self._recorded: list[str] = []
        self._swept = False

    @property
    def recorded(self) -> tuple[str, ...]:
        """Recorded directory paths in encounter order."""
        return tuple(self._recorded)

    def record(self, path: str) -> None:
        """Record a directory entry seen during the archive pass.

        Entries naming the target root, such as ``./``, are ignored.

        Args:
            path: Archive-relative directory path.

        Raises:
            RuntimeError: If the sweep has already started.
        """
        if self._swept:
            msg = f"Cannot record directory after the sweep: {path}"
            raise RuntimeError(msg)
        # The target directory itself is never swept
        if posixpath.normpath(path.lstrip("/") or ".") == ".":
            logger.debug("Not recording target root directory entry: %s", path)
            return
        self._recorded.append(path)

    def sweep(self) -> Iterator[DirectoryOutcome]:
        """Remove every recorded directory that is empty.

        Must be called once, after all file entries have been processed.
        Outcomes are yielded as each directory is handled.

        Yields:
            DirectoryOutcome for each recorded directory.

        Raises:
            RuntimeError: If the sweep is started a second time.
            RemovalError: If removing an empty directory fails for a
                reason other than it being already gone.
        """
        if self._swept:
            msg = "Directory sweep can only run once"
            raise RuntimeError(msg)
        self._swept = True

        for path in sorted(self._recorded, reverse=True):
            yield self._sweep_one(path)

    def _sweep_one(self, path: str) -> DirectoryOutcome:
        target = self._context.resolve(path)
        count = count_tree_entries(target)

        if count == 0:
            logger.debug("Directory not found in target directory: %s", target)
            return DirectoryOutcome(
                path=path,
                exists=False,
                empty=False,
                removed=False,
                skip_reason=SkipReason.DIR_NOT_FOUND,
            )

        if count > 1:
            logger.debug("Directory not empty (%d entries), keeping %s", count, target)
            return DirectoryOutcome(
                path=path,
                exists=True,
                empty=False,
                removed=False,
                skip_reason=SkipReason.DIR_NOT_EMPTY,
            )

        if self._context.dry_run:
            logger.info("Dry-run: would remove directory %s", target)
            return DirectoryOutcome(path=path, exists=True, empty=True, removed=False)

        try:
            target.rmdir()
        except FileNotFoundError:
            logger.debug("Directory already gone: %s", target)
            return DirectoryOutcome(
                path=path,
                exists=True,
                empty=True,
                removed=False,
                skip_reason=SkipReason.DIR_NOT_FOUND,
            )
        except OSError as e:
            raise RemovalError(f"Cannot remove directory {target}: {e}") from e

        logger.debug("Removed directory %s", target)
        return DirectoryOutcome(path=path, exists=True, empty=True, removed=True)
