from __future__ import annotations

"""
Visitor Implementations and Concrete File Entries.

Provides the collecting visitor used to extract a resolved path from a
tree walk, and the plain, disk-backed visit details used when a generated
file is presented as an ordinary filesystem entry.
"""

import os
from typing import BinaryIO, Optional

from gentree.domain.errors import UnsupportedOperationError
from gentree.domain.tree_models import FileVisitDetails, FileVisitor, RelativePath
from gentree.infra.fs import FileOperations

_NANOS_PER_SECOND = 1_000_000_000


class FileCollectingVisitor(FileVisitor):
    """Remembers the path of the last visited file; rejects directories."""

    def __init__(self) -> None:
        self.file: Optional[str] = None

    def visit_dir(self, dir_details: FileVisitDetails) -> None:
        raise UnsupportedOperationError("Visiting directories is not supported")

    def visit_file(self, file_details: FileVisitDetails) -> None:
        self.file = file_details.file


class ConcreteFileDetails(FileVisitDetails):
    """
    Visit details of an existing file on disk.

    Metadata is read from the filesystem on access; open() returns a
    readable binary handle that the caller must close.
    """

    def __init__(self, file: str, fs: FileOperations) -> None:
        self._file = file
        self._fs = fs

    @property
    def name(self) -> str:
        return os.path.basename(self._file)

    @property
    def relative_path(self) -> RelativePath:
        return RelativePath(True, (self.name,))

    @property
    def file(self) -> str:
        return self._file

    @property
    def size(self) -> int:
        return self._fs.size(self._file)

    @property
    def last_modified(self) -> int:
        return self._fs.mtime_ns(self._file) // _NANOS_PER_SECOND

    @property
    def mode(self) -> int:
        return self._fs.mode(self._file)

    def open(self) -> BinaryIO:
        return self._fs.open_read(self._file)

    def copy_to(self, output: BinaryIO) -> None:
        with self.open() as src:
            for chunk in iter(lambda: src.read(64 * 1024), b""):
                output.write(chunk)

    def __repr__(self) -> str:
        return f"ConcreteFileDetails({self._file!r})"
