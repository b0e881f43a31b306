"""Tests for the file system gateway implementations."""

from pathlib import Path

import pytest

from gitloom.gateway.filesystem.fake import FakeFileSystem
from gitloom.gateway.filesystem.real import RealFileSystem


def test_fake_read_missing_raises() -> None:
    with pytest.raises(FileNotFoundError):
        FakeFileSystem().read_text(Path("/missing"))


def test_fake_directory_exists_through_its_files() -> None:
    filesystem = FakeFileSystem(files={Path("/r/.git/rebase-merge/git-rebase-todo"): ""})

    assert filesystem.exists(Path("/r/.git/rebase-merge"))


def test_fake_remove_drops_children() -> None:
    filesystem = FakeFileSystem(files={Path("/d/a"): "x"}, directories={Path("/d/sub")})

    filesystem.remove(Path("/d"))

    assert not filesystem.exists(Path("/d/a"))
    assert not filesystem.exists(Path("/d/sub"))
    assert filesystem.removed_paths == [Path("/d")]


def test_fake_tracks_writes() -> None:
    filesystem = FakeFileSystem()

    filesystem.write_text(Path("/x"), "1")

    assert filesystem.files == {Path("/x"): "1"}
    assert filesystem.written_paths == [Path("/x")]


def test_real_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c.txt"

    RealFileSystem().write_text(target, "hello")

    assert RealFileSystem().read_text(target) == "hello"


def test_real_remove_handles_files_directories_and_missing(tmp_path: Path) -> None:
    filesystem = RealFileSystem()
    (tmp_path / "dir").mkdir()
    (tmp_path / "dir" / "f.txt").write_text("x", encoding="utf-8")
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")

    filesystem.remove(tmp_path / "dir")
    filesystem.remove(tmp_path / "file.txt")
    filesystem.remove(tmp_path / "never-existed")

    assert not filesystem.exists(tmp_path / "dir")
    assert not filesystem.exists(tmp_path / "file.txt")


def test_real_write_restores_bytes_decoded_from_git_output(tmp_path: Path) -> None:
    target = tmp_path / "x.patch"
    content = b"-caf\xe9\r\n+cafe\r\n".decode("utf-8", errors="surrogateescape")

    RealFileSystem().write_text(target, content)

    assert target.read_bytes() == b"-caf\xe9\r\n+cafe\r\n"
    assert RealFileSystem().read_text(target) == content
