"""Outcome models for file and directory removal decisions.

Outcomes are created once per entry, handed to the reporter and
collected in the run summary. They are never mutated or persisted.
"""

from dataclasses import dataclass
from enum import Enum


class SkipReason(str, Enum):
    """Reason why an entry was not removed.

    Attributes:
        VERIFICATION_FAILED: Target file content differs from the archive entry.
        NOT_FOUND: File does not exist in the target directory.
        DIR_NOT_FOUND: Directory does not exist (or vanished before removal).
        DIR_NOT_EMPTY: Directory still has children at sweep time.
    """

    VERIFICATION_FAILED = "verification_failed"
    NOT_FOUND = "not_found"
    DIR_NOT_FOUND = "dir_not_found"
    DIR_NOT_EMPTY = "dir_not_empty"


@dataclass(frozen=True, slots=True)
class RemovalOutcome:
    """Decision taken for one file entry.

    A dry run that would have removed the file yields ``removed=False``
    with no skip reason.

    Attributes:
        path: Archive-relative path of the entry.
        existed: Whether the file was found in the target directory.
        verified: Whether the content matched (always True when verification is off).
        removed: Whether the file was deleted.
        skip_reason: Why the file was kept, None if removed or dry run.
    """

    path: str
    existed: bool
    verified: bool
    removed: bool
    skip_reason: SkipReason | None = None

    def __post_init__(self) -> None:
        """Validate outcome consistency after initialization."""
        if self.removed and not (self.existed and self.verified):
            msg = f"File cannot be removed unless it existed and was verified: {self.path}"
            raise ValueError(msg)
        if self.removed and self.skip_reason is not None:
            msg = f"Removed file cannot have a skip reason: {self.path}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DirectoryOutcome:
    """Decision taken for one recorded directory during the sweep.

    Attributes:
        path: Archive-relative path of the directory entry.
        exists: Whether the directory was found in the target directory.
        empty: Whether the directory had no children at sweep time.
        removed: Whether the directory was deleted.
        skip_reason: Why the directory was kept, None if removed or dry run.
    """

    path: str
    exists: bool
    empty: bool
    removed: bool
    skip_reason: SkipReason | None = None

    def __post_init__(self) -> None:
        """Validate outcome consistency after initialization."""
        if self.removed and not (self.exists and self.empty):
            msg = f"Directory cannot be removed unless it existed and was empty: {self.path}"
            raise ValueError(msg)
