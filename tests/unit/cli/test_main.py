"""Unit tests for the archive-uninstall command.

Tests option handling, exit codes and the verbose report through
Typer's CliRunner.
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import call, patch

import pytest
from archive_uninstall.archive.types import ArchiveType
from archive_uninstall.cli.main import (
    EXIT_CONFIG,
    EXIT_FATAL,
    EXIT_TYPE_UNDETERMINED,
    EXIT_TYPE_UNRECOGNIZED,
    app,
)
from archive_uninstall.errors import RemovalError
from archive_uninstall.utils.formatting import make_console
from typer.testing import CliRunner

runner = CliRunner()

Entries = list[tuple[str, bytes | None]]


class TestArguments:
    """Tests for argument validation."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "archive-uninstall version" in result.stdout

    def test_missing_archive(self, tmp_path: Path, target_dir: Path) -> None:
        """A nonexistent archive is a usage error."""
        result = runner.invoke(app, [str(tmp_path / "missing.tar"), str(target_dir)])

        assert result.exit_code == 2

    def test_target_must_be_directory(
        self, make_archive: Callable[..., Path], sample_entries: Entries, tmp_path: Path
    ) -> None:
        """The target must be an existing directory."""
        archive = make_archive(sample_entries, ArchiveType.TAR)
        not_a_dir = tmp_path / "file.txt"
        not_a_dir.write_text("x")

        result = runner.invoke(app, [str(archive), str(not_a_dir)])

        assert result.exit_code == 2


class TestArchiveType:
    """Tests for archive type resolution exit codes."""

    def test_undetermined_type(self, tmp_path: Path, target_dir: Path) -> None:
        """An unknown extension without --type exits before traversal."""
        archive = tmp_path / "payload.bin"
        archive.write_bytes(b"data")

        with patch("archive_uninstall.cli.main.run_uninstall") as mock_run:
            result = runner.invoke(app, [str(archive), str(target_dir)])

        assert result.exit_code == EXIT_TYPE_UNDETERMINED
        assert "Unable to determine" in result.stdout + (result.stderr or "")
        mock_run.assert_not_called()

    def test_unrecognized_explicit_type(self, tmp_path: Path, target_dir: Path) -> None:
        """An unknown --type token has its own exit code."""
        archive = tmp_path / "payload.tar"
        archive.write_bytes(b"data")

        result = runner.invoke(app, ["--type", "cpio", str(archive), str(target_dir)])

        assert result.exit_code == EXIT_TYPE_UNRECOGNIZED
        assert "not recognized" in result.stdout + (result.stderr or "")

    def test_explicit_type_overrides_extension(
        self,
        make_archive: Callable[..., Path],
        sample_entries: Entries,
        populate: Callable[[dict[str, bytes]], None],
        target_dir: Path,
        tmp_path: Path,
    ) -> None:
        """--type lets an oddly named archive be read."""
        populate({"top.txt": b"top"})
        archive = make_archive(sample_entries, ArchiveType.ZIP)
        renamed = archive.rename(tmp_path / "payload.bin")

        result = runner.invoke(app, ["-t", "zip", str(renamed), str(target_dir)])

        assert result.exit_code == 0
        assert not (target_dir / "top.txt").exists()


class TestUninstall:
    """Tests for the main command behaviour."""

    def test_verbose_report(
        self,
        make_archive: Callable[..., Path],
        populate: Callable[[dict[str, bytes]], None],
        target_dir: Path,
    ) -> None:
        """Verbose mode prints a block per entry and a summary."""
        populate({"dir/file.txt": b"hello"})
        archive = make_archive([("dir/", None), ("dir/file.txt", b"hello")], ArchiveType.TAR)

        result = runner.invoke(
            app,
            ["-v", "--no-color", "--verify", "--remove-dirs", str(archive), str(target_dir)],
        )

        assert result.exit_code == 0
        assert "File: dir/file.txt" in result.stdout
        assert "Exists : Yes" in result.stdout
        assert "Directory: dir" in result.stdout
        assert "Empty  : Yes" in result.stdout
        assert "Summary: 1 removed" in result.stdout
        assert list(target_dir.iterdir()) == []

    def test_quiet_without_verbose(
        self,
        make_archive: Callable[..., Path],
        populate: Callable[[dict[str, bytes]], None],
        target_dir: Path,
    ) -> None:
        """Without --verbose nothing is printed."""
        populate({"a.txt": b"a"})
        archive = make_archive([("a.txt", b"a")], ArchiveType.ZIP)

        result = runner.invoke(app, [str(archive), str(target_dir)])

        assert result.exit_code == 0
        assert result.stdout == ""
        assert not (target_dir / "a.txt").exists()

    def test_dry_run(
        self,
        make_archive: Callable[..., Path],
        populate: Callable[[dict[str, bytes]], None],
        target_dir: Path,
    ) -> None:
        """--dry-run reports without removing."""
        populate({"a.txt": b"a"})
        archive = make_archive([("a.txt", b"a")], ArchiveType.TAR_XZ)

        result = runner.invoke(app, ["-v", "--dry-run", str(archive), str(target_dir)])

        assert result.exit_code == 0
        assert "Removed: No (dry run)" in result.stdout
        assert (target_dir / "a.txt").exists()

    def test_corrupt_archive_is_fatal(self, tmp_path: Path, target_dir: Path) -> None:
        """A corrupt archive exits with the fatal error code."""
        archive = tmp_path / "broken.tar.gz"
        archive.write_bytes(b"not gzip at all")

        result = runner.invoke(app, [str(archive), str(target_dir)])

        assert result.exit_code == EXIT_FATAL
        assert "error occurred while walking" in result.stdout + (result.stderr or "")

    def test_removal_error_is_fatal(
        self,
        make_archive: Callable[..., Path],
        sample_entries: Entries,
        target_dir: Path,
    ) -> None:
        """A removal failure aborts with the fatal error code."""
        archive = make_archive(sample_entries, ArchiveType.TAR)

        with patch(
            "archive_uninstall.cli.main.run_uninstall",
            side_effect=RemovalError("Cannot remove x: denied"),
        ):
            result = runner.invoke(app, [str(archive), str(target_dir)])

        assert result.exit_code == EXIT_FATAL


class TestConfigDefaults:
    """Tests for config file defaults."""

    def test_config_enables_verify(
        self,
        make_archive: Callable[..., Path],
        populate: Callable[[dict[str, bytes]], None],
        target_dir: Path,
        tmp_path: Path,
    ) -> None:
        """verify = true in the config file keeps modified files."""
        populate({"a.txt": b"modified"})
        archive = make_archive([("a.txt", b"original")], ArchiveType.TAR)
        config = tmp_path / "config.toml"
        config.write_text("[defaults]\nverify = true\n")

        result = runner.invoke(app, ["--config", str(config), str(archive), str(target_dir)])

        assert result.exit_code == 0
        assert (target_dir / "a.txt").exists()

    def test_invalid_config(
        self,
        make_archive: Callable[..., Path],
        sample_entries: Entries,
        target_dir: Path,
        tmp_path: Path,
    ) -> None:
        """A broken config file exits with the config error code."""
        archive = make_archive(sample_entries, ArchiveType.TAR)
        config = tmp_path / "config.toml"
        config.write_text("[defaults\n")

        result = runner.invoke(app, ["-c", str(config), str(archive), str(target_dir)])

        assert result.exit_code == EXIT_CONFIG


class TestErrorOutput:
    """Tests for how errors are written."""

    def test_no_color_flag_applies_to_early_errors(
        self,
        tmp_path: Path,
        target_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """--no-color strips colors from errors raised before the run starts."""
        monkeypatch.setenv("FORCE_COLOR", "1")
        monkeypatch.setenv("COLORTERM", "truecolor")
        archive = tmp_path / "payload.bin"
        archive.write_bytes(b"data")

        with patch(
            "archive_uninstall.cli.main.make_console",
            wraps=make_console,
        ) as mock_console:
            result = runner.invoke(app, ["--no-color", str(archive), str(target_dir)])

        output = result.stdout + (result.stderr or "")
        assert result.exit_code == EXIT_TYPE_UNDETERMINED
        assert "Unable to determine" in output
        assert "\x1b[38" not in output
        assert call(no_color=True, stderr=True) in mock_console.call_args_list

    def test_config_no_color_applies_to_fatal_errors(
        self,
        make_archive: Callable[..., Path],
        sample_entries: Entries,
        target_dir: Path,
        tmp_path: Path,
    ) -> None:
        """no_color from the config file also governs the error console."""
        archive = make_archive(sample_entries, ArchiveType.TAR)
        config = tmp_path / "config.toml"
        config.write_text("[defaults]\nno_color = true\n")

        with (
            patch(
                "archive_uninstall.cli.main.run_uninstall",
                side_effect=RemovalError("denied [x]"),
            ),
            patch(
                "archive_uninstall.cli.main.make_console",
                wraps=make_console,
            ) as mock_console,
        ):
            result = runner.invoke(app, ["-c", str(config), str(archive), str(target_dir)])

        assert result.exit_code == EXIT_FATAL
        assert "denied [x]" in result.stdout + (result.stderr or "")
        assert call(no_color=True, stderr=True) in mock_console.call_args_list
