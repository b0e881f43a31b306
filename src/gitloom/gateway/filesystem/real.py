"""Production file access using pathlib."""

import shutil
from pathlib import Path

from gitloom.gateway.filesystem.abc import FileSystem


class RealFileSystem(FileSystem):
    """Text is UTF-8 with surrogateescape and newlines are never translated,
    so content decoded from git output is written back byte for byte."""

    def read_text(self, path: Path) -> str:
        with path.open(encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)

    def remove(self, path: Path) -> None:
        # is_symlink first: a dangling link reports exists() == False
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)

    def exists(self, path: Path) -> bool:
        return path.exists()
