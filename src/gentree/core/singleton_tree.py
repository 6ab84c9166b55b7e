from __future__ import annotations

"""
Generated Single-File Tree.

A file tree that always contains exactly one file, whose bytes come from
a content generator and are materialized under a directory supplied on
demand. Build steps consume it through the same visitor contract as real
directory trees.
"""

import logging
import os
from typing import Any, Optional

from gentree.core.file_node import GeneratedFileNode
from gentree.core.visitors import ConcreteFileDetails, FileCollectingVisitor
from gentree.domain.errors import UnsupportedOperationError
from gentree.domain.tree_models import (
    ContentGenerator,
    DirectorySource,
    EntryKind,
    FileVisitDetails,
    FileVisitor,
    ResolvedFile,
)
from gentree.infra.fs import FileOperations, LocalFileOperations

logger = logging.getLogger(__name__)


class GeneratedSingletonFileTree:
    """
    Single-entry tree over a lazily generated file.

    Each visit hands the visitor a fresh GeneratedFileNode, so content is
    regenerated (and compared) once per visit. Instances are not
    thread-safe; concurrent visits must be serialized by the caller.
    """

    def __init__(
            self,
            directory_source: DirectorySource,
            file_name: str,
            generator: ContentGenerator,
            fs: Optional[FileOperations] = None,
    ) -> None:
        """
        Args:
            directory_source: Supplies the base directory, at most once per resolution.
            file_name: Name of the single generated file.
            generator: Writes the full content into the given binary sink.
            fs: File operations capability; host filesystem if omitted.
        """
        if not file_name or os.path.basename(file_name) != file_name:
            raise ValueError(f"Invalid generated file name: {file_name!r}")

        self._directory_source = directory_source
        self._file_name = file_name
        self._generator = generator
        self._fs = fs if fs is not None else LocalFileOperations()

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def display_name(self) -> str:
        return "file tree"

    # -------------------------------------------------------------------------
    # VISITATION
    # -------------------------------------------------------------------------

    def visit(self, visitor: FileVisitor) -> None:
        """Invoke visitor.visit_file exactly once with a new file node."""
        self._dispatch(visitor, EntryKind.FILE, self._create_node())

    def visit_directories(self, visitor: FileVisitor) -> None:
        """Always fails: this tree never contains directories."""
        raise UnsupportedOperationError(
            f"Visiting directories is not supported by {self.display_name} '{self._file_name}'"
        )

    def visit_tree_or_backing_file(self, visitor: FileVisitor) -> None:
        """Resolve the file and present it as an ordinary on-disk entry."""
        details = ConcreteFileDetails(self.get_file(), self._fs)
        self._dispatch(visitor, EntryKind.FILE, details)

    def _dispatch(self, visitor: FileVisitor, kind: EntryKind, details: FileVisitDetails) -> None:
        if kind is EntryKind.DIRECTORY:
            raise UnsupportedOperationError("Visiting directories is not supported")
        visitor.visit_file(details)

    def _create_node(self) -> GeneratedFileNode:
        return GeneratedFileNode(self._file_name, self._generator, self._directory_source, self._fs)

    # -------------------------------------------------------------------------
    # PATH ACCESSORS
    # -------------------------------------------------------------------------

    def get_file(self) -> str:
        """Resolve the generated file, writing it if needed, and return its path."""
        collector = FileCollectingVisitor()
        self.visit(collector)
        logger.debug(f"Resolved {self.display_name} to '{collector.file}'")
        return collector.file  # type: ignore[return-value]

    def resolve(self) -> ResolvedFile:
        """Materialize the file through a fresh node and return its resolved state."""
        return self._create_node().resolve()

    def get_file_without_creating(self) -> str:
        """Path the file would be materialized at; generates nothing."""
        return os.path.join(self._directory_source(), self._file_name)

    def register_watch_points(self, builder: Any) -> None:
        # Generated content has no watchable source.
        pass

    def __repr__(self) -> str:
        return f"GeneratedSingletonFileTree({self._file_name!r})"
