"""Per-file removal decisions.

For every file entry the remover locates the counterpart in the target
directory, optionally verifies its content against the archive, and
deletes it unless the run is a dry run.
"""

import logging
from typing import IO

from archive_uninstall.archive.entries import ArchiveEntry
from archive_uninstall.core.context import RunContext
from archive_uninstall.core.outcomes import RemovalOutcome, SkipReason
from archive_uninstall.core.verify import verify
from archive_uninstall.errors import RemovalError, VerificationError

logger = logging.getLogger(__name__)


class FileRemover:
    """Decides and performs the removal of target files.

    Deletes at most one file per processed entry and never touches the
    archive itself.

    Attributes:
        _context: Settings of the current run.
    """

    def __init__(self, context: RunContext) -> None:
        """Initialize the FileRemover.

        Args:
            context: Settings of the current run.
        """
        self._context = context

    def process(self, entry: ArchiveEntry) -> RemovalOutcome:
        """Process one file entry.

        Args:
            entry: A file entry of the archive being walked. For tar-family
                archives it must be the current entry of the traversal.

        Returns:
            RemovalOutcome describing the decision.

        Raises:
            ValueError: If the entry is a directory.
            RemovalError: If the target cannot be opened (other than not
                existing) or cannot be deleted.
            VerificationError: If either stream cannot be read during verification,
                including a target that is a directory.
        """
        if entry.is_dir:
            msg = f"Directory entries are not processed by FileRemover: {entry.path}"
            raise ValueError(msg)

        target = self._context.resolve(entry.path)
        try:
            handle = open(target, "rb")
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Not found in target directory: %s", target)
            return RemovalOutcome(
                path=entry.path,
                existed=False,
                verified=False,
                removed=False,
                skip_reason=SkipReason.NOT_FOUND,
            )
        except IsADirectoryError as e:
            # A directory (or a link to one) stands in the file's place: it exists,
            # but it has no content to compare
            if self._context.verify:
                raise VerificationError(f"Cannot read target file {target}: {e}") from e
            verified = True
        except OSError as e:
            raise RemovalError(f"Cannot open {target}: {e}") from e
        else:
            with handle:
                verified = self._verify(handle, entry)

        if not verified:
            logger.debug("Verification failed, keeping %s", target)
            return RemovalOutcome(
                path=entry.path,
                existed=True,
                verified=False,
                removed=False,
                skip_reason=SkipReason.VERIFICATION_FAILED,
            )

        if self._context.dry_run:
            logger.info("Dry-run: would remove %s", target)
            return RemovalOutcome(path=entry.path, existed=True, verified=True, removed=False)

        try:
            target.unlink()
        except OSError as e:
            raise RemovalError(f"Cannot remove {target}: {e}") from e

        logger.debug("Removed %s", target)
        return RemovalOutcome(path=entry.path, existed=True, verified=True, removed=True)

    def _verify(self, handle: IO[bytes], entry: ArchiveEntry) -> bool:
        """Compare target content with the entry, or accept if verification is off."""
        if not self._context.verify:
            return True
        with entry.open() as archive_stream:
            return verify(handle, archive_stream)
