"""Abstract interface for the handful of file operations the core performs."""

from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Abstract file access for dependency injection."""

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read a UTF-8 file; undecodable bytes and "\\r\\n" are preserved.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 file, creating parent directories as needed.

        Text from read_text() or from git output is written back unchanged.
        """
        ...

    @abstractmethod
    def remove(self, path: Path) -> None:
        """Remove a file or directory tree. Missing paths are not an error."""
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether a file or directory exists."""
        ...
