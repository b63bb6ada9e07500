"""Archive entry model.

An ArchiveEntry is one item of an archive listing. Directory entries
carry no content. File entries expose their content through ``open()``,
which enforces the access rules of the underlying format:

- Tar family: the content shares the archive cursor, so it may be
  opened at most once and only while the entry is the current one.
- Zip: members are random access, so content may be re-opened freely.
"""

from collections.abc import Callable
from typing import IO

from archive_uninstall.errors import EntryStateError

ContentOpener = Callable[[], IO[bytes]]


class EntryCursor:
    """Tracks which entry of a forward-only traversal is current.

    Each advance invalidates every entry issued before it.
    """

    def __init__(self) -> None:
        self._position = -1

    @property
    def position(self) -> int:
        """Index of the current entry (-1 before the first advance)."""
        return self._position

    def advance(self) -> int:
        """Move to the next entry and return its index."""
        self._position += 1
        return self._position


class ArchiveEntry:
    """One file or directory entry yielded by an entry source.

    Attributes:
        path: Archive-internal relative path with POSIX separators.
        is_dir: True for directory entries.
        reopenable: True if content may be opened more than once.
    """

    __slots__ = ("_cursor", "_opener", "_position", "_used", "is_dir", "path", "reopenable")

    def __init__(
        self,
        path: str,
        *,
        is_dir: bool,
        opener: ContentOpener | None = None,
        cursor: EntryCursor | None = None,
        reopenable: bool = False,
    ) -> None:
        if not path:
            msg = "Entry path cannot be empty"
            raise ValueError(msg)
        if not is_dir and opener is None:
            msg = f"File entry requires a content opener: {path}"
            raise ValueError(msg)

        self.path = path
        self.is_dir = is_dir
        self.reopenable = reopenable
        self._opener = opener
        self._cursor = cursor
        self._position = cursor.position if cursor is not None else -1
        self._used = False

    @classmethod
    def directory(cls, path: str) -> "ArchiveEntry":
        """Create a directory entry."""
        return cls(path, is_dir=True)

    @property
    def used(self) -> bool:
        """Check if the content has already been opened."""
        return self._used

    @property
    def is_current(self) -> bool:
        """Check if this entry is still the current one of its traversal."""
        if self._cursor is None:
            return True
        return self._cursor.position == self._position

    def open(self) -> IO[bytes]:
        """Open the entry's content stream.

        Returns:
            Binary stream positioned at the start of the content.

        Raises:
            EntryStateError: If the entry is a directory, was already
                opened (single-read entries), or is no longer current.
        """
        if self.is_dir or self._opener is None:
            msg = f"Directory entry has no content: {self.path}"
            raise EntryStateError(msg)
        if not self.reopenable:
            if self._used:
                msg = f"Entry content already consumed: {self.path}"
                raise EntryStateError(msg)
            if not self.is_current:
                msg = f"Entry is no longer current in archive traversal: {self.path}"
                raise EntryStateError(msg)
        self._used = True
        return self._opener()

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"ArchiveEntry({self.path!r}, {kind})"
