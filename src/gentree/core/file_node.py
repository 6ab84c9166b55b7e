from __future__ import annotations

"""
Generated File Node.

The single leaf of a generated tree. Resolution is lazy and memoized: the
first access to the path, size or timestamp materializes the generated
content on disk, rewriting an existing file only when its bytes differ.
Skipping redundant writes keeps the modification time stable, so
incremental build caches and filesystem watchers keyed on it are not
invalidated.
"""

import io
import logging
import os
from typing import BinaryIO, Optional

from gentree.core.change_detector import content_changed
from gentree.domain.errors import GenerationError, UnsupportedOperationError
from gentree.domain.tree_models import (
    ContentGenerator,
    DirectorySource,
    FileVisitDetails,
    RelativePath,
    ResolvedFile,
)
from gentree.infra.fs import FileOperations

logger = logging.getLogger(__name__)

_NANOS_PER_SECOND = 1_000_000_000


class GeneratedFileNode(FileVisitDetails):
    """
    Visit details of a file whose content is produced on demand.

    Holds either no state (unresolved) or a ResolvedFile. Every metadata
    accessor goes through resolve(), the only place where state changes.
    """

    def __init__(
            self,
            name: str,
            generator: ContentGenerator,
            directory_source: DirectorySource,
            fs: FileOperations,
    ) -> None:
        self._name = name
        self._generator = generator
        self._directory_source = directory_source
        self._fs = fs
        self._state: Optional[ResolvedFile] = None

    # -------------------------------------------------------------------------
    # RESOLUTION
    # -------------------------------------------------------------------------

    @property
    def is_resolved(self) -> bool:
        return self._state is not None

    def resolve(self) -> ResolvedFile:
        """
        Materialize the generated file and memoize its metadata.

        The directory source is queried exactly once; the resulting target
        path is reused for the existence check, the comparison and the write.

        Returns:
            ResolvedFile: Path, size and whole-second timestamp of the file.

        Raises:
            GenerationError: If the generator or the target write fails.
        """
        if self._state is not None:
            return self._state

        target = os.path.join(self._directory_source(), self._name)

        if not self._fs.exists(target):
            logger.debug(f"Generating '{target}' (target absent)")
            self.copy_to_file(target)
            written = True
        else:
            written = self._update_only_when_content_changes(target)

        # Truncated to whole seconds
        last_modified = self._fs.mtime_ns(target) // _NANOS_PER_SECOND
        self._state = ResolvedFile(
            path=target,
            size=self._fs.size(target),
            last_modified=last_modified,
            written=written,
        )
        return self._state

    def _update_only_when_content_changes(self, target: str) -> bool:
        generated = self._generate_content()
        if not content_changed(generated, target, self._fs):
            logger.debug(f"Generated content unchanged, keeping '{target}'")
            return False

        logger.debug(f"Generated content changed, rewriting '{target}' ({len(generated)} bytes)")
        try:
            self._fs.write_bytes(target, generated)
        except OSError as e:
            raise GenerationError(f"Failed to write generated file '{target}': {e}") from e
        return True

    def _generate_content(self) -> bytes:
        buffer = io.BytesIO()
        self.copy_to(buffer)
        return buffer.getvalue()

    # -------------------------------------------------------------------------
    # CONTENT ACCESS
    # -------------------------------------------------------------------------

    def copy_to(self, output: BinaryIO) -> None:
        """
        Write the generated content into an arbitrary binary stream.

        Does not resolve the node and never touches the target file.

        Raises:
            GenerationError: If the generator fails with an OSError.
        """
        try:
            self._generator(output)
        except GenerationError:
            raise
        except OSError as e:
            raise GenerationError(f"Content generation failed for '{self._name}': {e}") from e

    def copy_to_file(self, target: str) -> None:
        """Write the generated content to a path other than the resolved one."""
        try:
            with self._fs.open_write(target) as sink:
                self.copy_to(sink)
        except GenerationError:
            raise
        except OSError as e:
            raise GenerationError(f"Failed to write generated file '{target}': {e}") from e

    def open(self) -> BinaryIO:
        raise UnsupportedOperationError(
            f"Generated content of '{self._name}' cannot be opened as a stream"
        )

    # -------------------------------------------------------------------------
    # VISIT DETAILS
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def relative_path(self) -> RelativePath:
        return RelativePath(True, (self._name,))

    @property
    def file(self) -> str:
        return self.resolve().path

    @property
    def size(self) -> int:
        return self.resolve().size

    @property
    def last_modified(self) -> int:
        return self.resolve().last_modified

    @property
    def mode(self) -> int:
        return self._fs.mode(self.resolve().path)

    def stop_visiting(self) -> None:
        # only one file
        pass

    def __repr__(self) -> str:
        state = self._state.path if self._state else "unresolved"
        return f"GeneratedFileNode({self._name!r}, {state})"
