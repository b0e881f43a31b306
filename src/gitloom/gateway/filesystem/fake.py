"""In-memory file system for testing."""

from pathlib import Path

from gitloom.gateway.filesystem.abc import FileSystem


class FakeFileSystem(FileSystem):
    """In-memory fake implementation of FileSystem.

    Constructor Injection:
    ---------------------
    - files: Mapping of path -> text content
    - directories: Paths that exist as directories (e.g. .git/rebase-merge)

    Mutation Tracking:
    -----------------
    - removed_paths: Paths passed to remove(), in order
    - written_paths: Paths passed to write_text(), in order
    """

    def __init__(
        self,
        *,
        files: dict[Path, str] | None = None,
        directories: set[Path] | None = None,
    ) -> None:
        self._files = dict(files) if files is not None else {}
        self._directories = set(directories) if directories is not None else set()
        self._removed_paths: list[Path] = []
        self._written_paths: list[Path] = []

    def read_text(self, path: Path) -> str:
        if path not in self._files:
            raise FileNotFoundError(str(path))
        return self._files[path]

    def write_text(self, path: Path, content: str) -> None:
        self._files[path] = content
        self._written_paths.append(path)

    def remove(self, path: Path) -> None:
        self._removed_paths.append(path)
        self._files.pop(path, None)
        self._directories.discard(path)
        for child in [p for p in self._files if path in p.parents]:
            del self._files[child]
        for child in [d for d in self._directories if path in d.parents]:
            self._directories.discard(child)

    def exists(self, path: Path) -> bool:
        if path in self._files or path in self._directories:
            return True
        return any(path in p.parents for p in self._files)

    def add_directory(self, path: Path) -> None:
        """Create a directory (used to simulate git starting a rebase)."""
        self._directories.add(path)

    @property
    def files(self) -> dict[Path, str]:
        return dict(self._files)

    @property
    def removed_paths(self) -> list[Path]:
        return list(self._removed_paths)

    @property
    def written_paths(self) -> list[Path]:
        return list(self._written_paths)
