from __future__ import annotations

"""
File Tree Structure Data Models.

Provides the value types and the visitor contract shared by every tree
implementation: relative paths, the file/directory entry tag, the
resolved state of a materialized file and the visitor callbacks.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable, Tuple

# Zero-argument callable returning an existing, writable directory
DirectorySource = Callable[[], str]

# Callable writing the full generated content into the given binary sink
ContentGenerator = Callable[[BinaryIO], None]

# -----------------------------------------------------------------------------
# VALUE TYPES
# -----------------------------------------------------------------------------

class EntryKind(Enum):
    """Tag used to dispatch a visited entry to the matching visitor callback."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class RelativePath:
    """
    Location of an entry relative to the root of its tree.

    Attributes:
        is_file: True when the path designates a file entry.
        segments: Path components from the tree root.
    """
    is_file: bool
    segments: Tuple[str, ...]

    @property
    def last_name(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def path_string(self) -> str:
        return "/".join(self.segments)

    def get_file(self, base_dir: str) -> str:
        """Resolve this relative path against a concrete base directory."""
        return os.path.join(base_dir, *self.segments)

    def __str__(self) -> str:
        return self.path_string


@dataclass(frozen=True)
class ResolvedFile:
    """
    Memoized outcome of a file resolution.

    Attributes:
        path: Absolute location of the materialized file.
        size: File length in bytes.
        last_modified: Modification time in whole seconds since the epoch.
        written: Whether this resolution wrote to the target.
    """
    path: str
    size: int
    last_modified: int
    written: bool = False

# -----------------------------------------------------------------------------
# VISITOR CONTRACT
# -----------------------------------------------------------------------------

class FileVisitDetails(ABC):
    """
    Read-only view of a visited entry handed to FileVisitor callbacks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def relative_path(self) -> RelativePath:
        ...

    @property
    @abstractmethod
    def file(self) -> str:
        """Concrete filesystem path of the entry."""

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @property
    @abstractmethod
    def last_modified(self) -> int:
        ...

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def path(self) -> str:
        return self.relative_path.path_string

    @property
    def display_name(self) -> str:
        return self.name

    @abstractmethod
    def open(self) -> BinaryIO:
        ...

    def stop_visiting(self) -> None:
        """Request the walk to end early; trees with one entry ignore it."""


class FileVisitor(ABC):
    """
    Receives the entries of a tree walk.

    Implementations must override visit_file; visit_dir is only invoked by
    trees that actually contain directories.
    """

    def visit_dir(self, dir_details: FileVisitDetails) -> None:
        pass

    @abstractmethod
    def visit_file(self, file_details: FileVisitDetails) -> None:
        ...
