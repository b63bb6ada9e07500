"""Run context shared by every component of a run.

The context is built once from the parsed command line and the
configuration file, then passed explicitly to the entry source driver,
the file remover and the directory tracker.
"""

from dataclasses import dataclass
from pathlib import Path

from archive_uninstall.archive.types import ArchiveType
from archive_uninstall.core.config import RunDefaults


@dataclass(frozen=True, slots=True)
class RunContext:
    """Immutable settings for one archive-uninstall run.

    Attributes:
        archive_path: Path to the archive file.
        target_dir: Directory that archive-relative paths are resolved against.
        archive_type: Resolved archive format.
        verbose: Emit per-entry status lines.
        dry_run: Compute and report decisions without mutating the filesystem.
        verify: Compare content digests before removing a file.
        remove_dirs: Sweep directories left empty after the file pass.
        no_color: Disable colored output.
    """

    archive_path: Path
    target_dir: Path
    archive_type: ArchiveType
    verbose: bool = False
    dry_run: bool = False
    verify: bool = False
    remove_dirs: bool = False
    no_color: bool = False

    @classmethod
    def from_options(
        cls,
        archive_path: Path,
        target_dir: Path,
        archive_type: ArchiveType,
        defaults: RunDefaults,
        *,
        verbose: bool = False,
        dry_run: bool = False,
        verify: bool = False,
        remove_dirs: bool = False,
        no_color: bool = False,
    ) -> "RunContext":
        """Build a context from command-line flags and configured defaults.

        A flag that is set always wins; otherwise the configured default applies.
        """
        return cls(
            archive_path=archive_path,
            target_dir=target_dir,
            archive_type=archive_type,
            verbose=verbose or defaults.verbose,
            dry_run=dry_run or defaults.dry_run,
            verify=verify or defaults.verify,
            remove_dirs=remove_dirs or defaults.remove_dirs,
            no_color=no_color or defaults.no_color,
        )

    def resolve(self, relative_path: str) -> Path:
        """Join an archive-relative path onto the target directory.

        The join is purely lexical: ``..`` segments are kept as-is. A leading
        ``/`` is dropped so an absolute entry name stays under the target.
        """
        return self.target_dir / relative_path.lstrip("/")
