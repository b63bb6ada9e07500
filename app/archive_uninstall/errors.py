"""Exception hierarchy for archive-uninstall.

Every fatal condition of a run derives from UninstallError so the CLI
can convert it into a single error message and exit code.
"""


class UninstallError(Exception):
    """Base exception for all archive-uninstall errors."""


class ArchiveTypeError(UninstallError):
    """Base exception for archive type resolution errors."""


class UndeterminedArchiveTypeError(ArchiveTypeError):
    """Raised when the archive type cannot be inferred from a filename."""


class UnrecognizedArchiveTypeError(ArchiveTypeError):
    """Raised when an explicit archive type token is not recognized."""


class ArchiveReadError(UninstallError):
    """Raised when an archive cannot be opened or is corrupt."""


class EntryStateError(UninstallError):
    """Raised when entry content is accessed out of order or twice."""


class VerificationError(UninstallError):
    """Raised when a stream cannot be fully read for verification."""


class RemovalError(UninstallError):
    """Raised when a file or directory cannot be removed."""


class ConfigError(UninstallError):
    """Base exception for configuration file errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file contains invalid TOML."""
