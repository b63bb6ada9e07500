"""Content verification by SHA-256 digest.

Both streams are read fully into memory and digested independently;
equality is digest equality only.
"""

import hashlib
import lzma
import tarfile
import zipfile
import zlib
from typing import IO

from archive_uninstall.errors import VerificationError

# Errors a codec can raise while its content stream is being read
_READ_ERRORS = (
    OSError,
    EOFError,
    tarfile.TarError,
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
)


def digest_stream(stream: IO[bytes], name: str = "stream") -> bytes:
    """Read a stream to the end and return its SHA-256 digest.

    Args:
        stream: Binary stream to read.
        name: Stream description used in error messages.

    Returns:
        The 32-byte SHA-256 digest.

    Raises:
        VerificationError: If the stream cannot be fully read.
    """
    try:
        data = stream.read()
    except _READ_ERRORS as e:
        raise VerificationError(f"Cannot read {name}: {e}") from e
    return hashlib.sha256(data).digest()


def verify(target_stream: IO[bytes], archive_stream: IO[bytes]) -> bool:
    """Check whether two streams have identical content.

    Args:
        target_stream: Content of the file in the target directory.
        archive_stream: Content of the archive entry.

    Returns:
        True if both SHA-256 digests are equal.

    Raises:
        VerificationError: If either stream cannot be fully read.
    """
    target_digest = digest_stream(target_stream, "target file")
    archive_digest = digest_stream(archive_stream, "archive entry")
    return target_digest == archive_digest
