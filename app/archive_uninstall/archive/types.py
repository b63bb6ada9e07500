"""Archive type model and resolution.

The archive type is fixed once per run, either from an explicit token
given on the command line or from the archive filename's extension.
"""

from enum import Enum

from archive_uninstall.errors import (
    UndeterminedArchiveTypeError,
    UnrecognizedArchiveTypeError,
)


class ArchiveType(str, Enum):
    """Supported archive formats.

    Attributes:
        TAR: Uncompressed tar archive.
        TAR_GZ: Gzip-compressed tar archive.
        TAR_BZ2: Bzip2-compressed tar archive.
        TAR_XZ: XZ-compressed tar archive.
        ZIP: Zip archive.
    """

    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_BZ2 = "tar.bz2"
    TAR_XZ = "tar.xz"
    ZIP = "zip"

    @property
    def is_tar_family(self) -> bool:
        """Check if entries must be consumed in stream order."""
        return self != ArchiveType.ZIP


_SUFFIXES: tuple[tuple[str, ArchiveType], ...] = (
    (".tar.bz2", ArchiveType.TAR_BZ2),
    (".tar.gz", ArchiveType.TAR_GZ),
    (".tar.xz", ArchiveType.TAR_XZ),
    (".tbz2", ArchiveType.TAR_BZ2),
    (".tbz", ArchiveType.TAR_BZ2),
    (".tgz", ArchiveType.TAR_GZ),
    (".txz", ArchiveType.TAR_XZ),
    (".tar", ArchiveType.TAR),
    (".zip", ArchiveType.ZIP),
)

# Tokens accepted by --type, shown in help text
TYPE_HINTS: tuple[str, ...] = (".tar", ".tar.bz2", ".tar.gz", ".tar.xz", ".zip")


def _match_suffix(name: str) -> ArchiveType | None:
    lowered = name.strip().lower()
    for suffix, archive_type in _SUFFIXES:
        if lowered.endswith(suffix):
            return archive_type
    return None


def determine_type(filename: str) -> ArchiveType:
    """Infer the archive type from a filename's extension.

    Args:
        filename: Archive filename or path.

    Returns:
        The matching ArchiveType.

    Raises:
        UndeterminedArchiveTypeError: If no known extension matches.
    """
    archive_type = _match_suffix(filename)
    if archive_type is None:
        msg = f"Unable to determine the archive type of '{filename}'"
        raise UndeterminedArchiveTypeError(msg)
    return archive_type


def parse_type_token(token: str) -> ArchiveType:
    """Parse an explicit archive type token such as ``.tar.gz`` or ``zip``.

    Args:
        token: Type token, with or without a leading dot.

    Returns:
        The matching ArchiveType.

    Raises:
        UnrecognizedArchiveTypeError: If the token names no supported type.
    """
    normalized = token.strip().lower()
    if not normalized.startswith("."):
        normalized = f".{normalized}"

    archive_type = dict(_SUFFIXES).get(normalized)
    if archive_type is None:
        msg = f"Unrecognized archive type: '{token}'"
        raise UnrecognizedArchiveTypeError(msg)
    return archive_type


def resolve_archive_type(archive_filename: str, explicit: str | None = None) -> ArchiveType:
    """Resolve the archive type for a run.

    An explicit token takes precedence over the filename.

    Args:
        archive_filename: Archive filename used for inference.
        explicit: Optional explicit type token (from ``--type``).

    Returns:
        The resolved ArchiveType.

    Raises:
        UndeterminedArchiveTypeError: If inference from the filename fails.
        UnrecognizedArchiveTypeError: If the explicit token is not recognized.
    """
    if explicit:
        return parse_type_token(explicit)
    return determine_type(archive_filename)
