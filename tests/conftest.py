"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, most notably
builders for small tar and zip archives.
"""

import io
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from archive_uninstall.archive.types import ArchiveType
from archive_uninstall.core.context import RunContext

# (path, content) pairs; content None marks a directory entry
ArchiveSpec = list[tuple[str, bytes | None]]

_TAR_WRITE_MODES: dict[ArchiveType, str] = {
    ArchiveType.TAR: "w",
    ArchiveType.TAR_GZ: "w:gz",
    ArchiveType.TAR_BZ2: "w:bz2",
    ArchiveType.TAR_XZ: "w:xz",
}

_EXTENSIONS: dict[ArchiveType, str] = {
    ArchiveType.TAR: ".tar",
    ArchiveType.TAR_GZ: ".tar.gz",
    ArchiveType.TAR_BZ2: ".tar.bz2",
    ArchiveType.TAR_XZ: ".tar.xz",
    ArchiveType.ZIP: ".zip",
}


def write_archive(path: Path, entries: ArchiveSpec, archive_type: ArchiveType) -> Path:
    """Write an archive containing the given entries in the given order."""
    if archive_type == ArchiveType.ZIP:
        with zipfile.ZipFile(path, "w") as zf:
            for name, content in entries:
                if content is None:
                    zf.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
                else:
                    zf.writestr(name, content)
        return path

    with tarfile.open(path, _TAR_WRITE_MODES[archive_type]) as tf:
        for name, content in entries:
            info = tarfile.TarInfo(name.rstrip("/"))
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tf.addfile(info)
            else:
                info.size = len(content)
                tf.addfile(info, io.BytesIO(content))
    return path


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so no user config is read."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty target directory."""
    target = tmp_path / "target"
    target.mkdir()
    return target


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory building an archive under tmp_path.

    Usage: ``make_archive([("dir/", None), ("dir/a.txt", b"a")], ArchiveType.TAR)``
    """

    def _make(
        entries: ArchiveSpec,
        archive_type: ArchiveType = ArchiveType.TAR,
        name: str = "archive",
    ) -> Path:
        path = tmp_path / f"{name}{_EXTENSIONS[archive_type]}"
        return write_archive(path, entries, archive_type)

    return _make


@pytest.fixture
def sample_entries() -> ArchiveSpec:
    """A small archive layout with nested directories."""
    return [
        ("dir/", None),
        ("dir/file.txt", b"hello"),
        ("dir/sub/", None),
        ("dir/sub/nested.txt", b"nested"),
        ("top.txt", b"top"),
    ]


@pytest.fixture
def populate(target_dir: Path) -> Callable[[dict[str, bytes]], None]:
    """Factory creating files (and their parent directories) under target_dir."""

    def _populate(files: dict[str, bytes]) -> None:
        for rel, content in files.items():
            path = target_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

    return _populate


@pytest.fixture
def make_context(target_dir: Path) -> Callable[..., RunContext]:
    """Factory building a RunContext against target_dir."""

    def _make(archive: Path, archive_type: ArchiveType, **flags: bool) -> RunContext:
        return RunContext(
            archive_path=archive,
            target_dir=target_dir,
            archive_type=archive_type,
            **flags,
        )

    return _make


@pytest.fixture
def make_link_tar(tmp_path: Path) -> Callable[..., Path]:
    """Factory building an uncompressed tar that may hold link members.

    Members are ``(name, kind, payload)`` with kind one of ``dir``, ``file``,
    ``symlink`` or ``hardlink``; payload is the file content or link target.
    """

    def _make(members: list[tuple[str, str, bytes | str | None]], name: str = "links") -> Path:
        path = tmp_path / f"{name}.tar"
        with tarfile.open(path, "w") as tf:
            for member_name, kind, payload in members:
                info = tarfile.TarInfo(member_name.rstrip("/"))
                if kind == "dir":
                    info.type = tarfile.DIRTYPE
                    info.mode = 0o755
                    tf.addfile(info)
                elif kind == "file":
                    assert isinstance(payload, bytes)
                    info.size = len(payload)
                    tf.addfile(info, io.BytesIO(payload))
                else:
                    assert isinstance(payload, str)
                    info.type = tarfile.SYMTYPE if kind == "symlink" else tarfile.LNKTYPE
                    info.linkname = payload
                    tf.addfile(info)
        return path

    return _make
