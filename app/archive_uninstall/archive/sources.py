"""Archive entry sources.

This module defines the EntrySource interface that hides the archive
codecs behind a single forward-only sequence of ArchiveEntry values,
and its tar-family and zip implementations.
"""

import io
import logging
import tarfile
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from functools import partial
from pathlib import Path
from types import TracebackType
from typing import IO, Self

from archive_uninstall.archive.entries import ArchiveEntry, EntryCursor
from archive_uninstall.archive.types import ArchiveType
from archive_uninstall.errors import ArchiveReadError, EntryStateError

logger = logging.getLogger(__name__)


class EntrySource(ABC):
    """Abstract base class for all archive entry sources.

    An entry source is single-pass and non-restartable: it can be
    iterated exactly once, yielding entries in the archive's own
    listing order. Sources are context managers and release the
    underlying archive file on exit.

    Example:
        >>> with open_entry_source(Path("a.tar.gz"), ArchiveType.TAR_GZ) as source:
        ...     for entry in source:
        ...         print(entry.path, entry.is_dir)
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._iterated = False

    @property
    def path(self) -> Path:
        """Return the archive path."""
        return self._path

    @property
    @abstractmethod
    def archive_type(self) -> ArchiveType:
        """Return the archive type this source reads."""

    @abstractmethod
    def _entries(self) -> Iterator[ArchiveEntry]:
        """Yield the archive's entries in listing order.

        Raises:
            ArchiveReadError: If the archive cannot be opened or is corrupt.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying archive file."""

    def __iter__(self) -> Iterator[ArchiveEntry]:
        if self._iterated:
            msg = f"Entry source cannot be restarted: {self._path}"
            raise EntryStateError(msg)
        self._iterated = True
        return self._entries()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class TarEntrySource(EntrySource):
    """Entry source for the tar family (plain, gzip, bzip2, xz).

    The archive is opened in stream mode so the cursor only moves
    forward. A file entry's content is readable only while that entry
    is current, and only once.
    """

    _STREAM_MODES: dict[ArchiveType, str] = {
        ArchiveType.TAR: "r|",
        ArchiveType.TAR_GZ: "r|gz",
        ArchiveType.TAR_BZ2: "r|bz2",
        ArchiveType.TAR_XZ: "r|xz",
    }

    def __init__(self, path: Path, archive_type: ArchiveType) -> None:
        if archive_type not in self._STREAM_MODES:
            msg = f"Not a tar-family archive type: {archive_type.value}"
            raise ValueError(msg)
        super().__init__(path)
        self._archive_type = archive_type
        self._tar: tarfile.TarFile | None = None

    @property
    def archive_type(self) -> ArchiveType:
        return self._archive_type

    def _open(self) -> tarfile.TarFile:
        mode = self._STREAM_MODES[self._archive_type]
        try:
            # Stream modes are not covered by tarfile.open's overloads
            return tarfile.open(name=str(self._path), mode=mode)  # type: ignore[call-overload]
        except (tarfile.TarError, OSError, EOFError) as e:
            msg = f"Cannot open archive {self._path}: {e}"
            raise ArchiveReadError(msg) from e

    def _entries(self) -> Iterator[ArchiveEntry]:
        self._tar = self._open()
        cursor = EntryCursor()
        logger.debug("Walking %s archive %s", self._archive_type.value, self._path)

        while True:
            try:
                member = self._tar.next()
            except (tarfile.TarError, OSError, EOFError) as e:
                msg = f"Error reading archive {self._path}: {e}"
                raise ArchiveReadError(msg) from e
            if member is None:
                return

            cursor.advance()
            if member.isdir():
                yield ArchiveEntry.directory(member.name)
            else:
                yield ArchiveEntry(
                    member.name,
                    is_dir=False,
                    opener=partial(self._extract, member),
                    cursor=cursor,
                )

    def _extract(self, member: tarfile.TarInfo) -> IO[bytes]:
        if self._tar is None:
            msg = f"Archive is not open: {self._path}"
            raise EntryStateError(msg)
        # Links and special files have no data of their own in the stream
        if not member.isreg():
            return io.BytesIO(b"")
        try:
            stream = self._tar.extractfile(member)
        except (tarfile.TarError, OSError) as e:
            msg = f"Cannot read {member.name} from {self._path}: {e}"
            raise ArchiveReadError(msg) from e
        if stream is None:
            return io.BytesIO(b"")
        return stream

    def close(self) -> None:
        if self._tar is not None:
            self._tar.close()
            self._tar = None


class ZipEntrySource(EntrySource):
    """Entry source for zip archives.

    Zip members are random access, so each file entry may be opened
    independently and more than once.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self._zip: zipfile.ZipFile | None = None

    @property
    def archive_type(self) -> ArchiveType:
        return ArchiveType.ZIP

    def _entries(self) -> Iterator[ArchiveEntry]:
        try:
            self._zip = zipfile.ZipFile(self._path)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
            msg = f"Cannot open archive {self._path}: {e}"
            raise ArchiveReadError(msg) from e

        logger.debug("Walking zip archive %s", self._path)
        for info in self._zip.infolist():
            if info.is_dir():
                yield ArchiveEntry.directory(info.filename)
            else:
                yield ArchiveEntry(
                    info.filename,
                    is_dir=False,
                    opener=partial(self._open_member, info),
                    reopenable=True,
                )

    def _open_member(self, info: zipfile.ZipInfo) -> IO[bytes]:
        if self._zip is None:
            msg = f"Archive is not open: {self._path}"
            raise EntryStateError(msg)
        try:
            return self._zip.open(info)
        except (zipfile.BadZipFile, RuntimeError, OSError) as e:
            msg = f"Cannot read {info.filename} from {self._path}: {e}"
            raise ArchiveReadError(msg) from e

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None


def open_entry_source(path: Path, archive_type: ArchiveType) -> EntrySource:
    """Create the entry source for an archive.

    Args:
        path: Path to the archive file.
        archive_type: Resolved archive type.

    Returns:
        An unopened EntrySource; the archive is opened on first iteration.
    """
    if archive_type == ArchiveType.ZIP:
        return ZipEntrySource(path)
    return TarEntrySource(path, archive_type)
