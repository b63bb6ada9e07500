"""Archive access module.

This module provides the archive type model and the entry sources
that present every supported format as one sequence of entries.
"""

from archive_uninstall.archive.entries import ArchiveEntry, EntryCursor
from archive_uninstall.archive.sources import (
    EntrySource,
    TarEntrySource,
    ZipEntrySource,
    open_entry_source,
)
from archive_uninstall.archive.types import (
    TYPE_HINTS,
    ArchiveType,
    determine_type,
    parse_type_token,
    resolve_archive_type,
)

__all__ = [
    "TYPE_HINTS",
    "ArchiveEntry",
    "ArchiveType",
    "EntryCursor",
    "EntrySource",
    "TarEntrySource",
    "ZipEntrySource",
    "determine_type",
    "open_entry_source",
    "parse_type_token",
    "resolve_archive_type",
]
