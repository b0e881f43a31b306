"""File access gateway."""

from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.gateway.filesystem.fake import FakeFileSystem
from gitloom.gateway.filesystem.real import RealFileSystem

__all__ = [
    "FileSystem",
    "RealFileSystem",
    "FakeFileSystem",
]
