"""File system primitives used by the loader.

The loader only ever asks three questions of the disk: does a path exist,
is it a regular file, and what does a directory contain. Keeping them
behind a small interface lets tests substitute an in-memory tree.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectoryEntry:
    """One entry returned by FileSystem.list_directory.

    Attributes:
        path: Full path of the entry.
        is_file: True for regular files.
    """

    path: str
    is_file: bool

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def parent(self) -> str:
        return os.path.dirname(self.path)


class FileSystem(ABC):
    """Abstract file system interface."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if anything exists at path."""
        ...

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Return True if path is a regular file."""
        ...

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Return True if path is a directory."""
        ...

    @abstractmethod
    def list_directory(self, path: str, recursive: bool = False) -> Iterator[DirectoryEntry]:
        """List the entries under path.

        Recursive listings yield a directory before its contents.

        Raises:
            NotADirectoryError: If path is missing or is not a directory.
        """
        ...


class LocalFileSystem(FileSystem):
    """FileSystem backed by pathlib."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_file(self, path: str) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def list_directory(self, path: str, recursive: bool = False) -> Iterator[DirectoryEntry]:
        root = Path(path)
        if not root.is_dir():
            raise NotADirectoryError(path)
        return self._walk(root, recursive)

    def _walk(self, root: Path, recursive: bool) -> Iterator[DirectoryEntry]:
        for child in sorted(root.iterdir()):
            is_file = child.is_file()
            yield DirectoryEntry(path=str(child), is_file=is_file)
            if recursive and child.is_dir():
                yield from self._walk(child, recursive)


__all__ = ["DirectoryEntry", "FileSystem", "LocalFileSystem"]
