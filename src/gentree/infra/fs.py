from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the injectable file operations capability used by the generated
file tree, together with path normalization and directory source helpers.
Acts as the single abstraction over 'os' so that resolution logic never
reaches for process-wide filesystem state directly.
"""

import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import BinaryIO, Callable, ContextManager, Iterator, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "gentree"
UNIX_APP_DIR_NAME = ".gentree"
GENERATED_SUBDIR = "generated"

# -----------------------------------------------------------------------------
# FILE OPERATIONS CAPABILITY
# -----------------------------------------------------------------------------

class FileOperations(ABC):
    """
    Abstract interface for the filesystem calls made during resolution.

    Covers existence checks, whole-file reads and writes, a streaming
    write sink, and the size/mtime/permission metadata of a path.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def open_write(self, path: str) -> ContextManager[BinaryIO]:
        """Context manager yielding a binary sink that truncates the target."""
        raise NotImplementedError

    @abstractmethod
    def open_read(self, path: str) -> BinaryIO:
        raise NotImplementedError

    @abstractmethod
    def size(self, path: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def mtime_ns(self, path: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def mode(self, path: str) -> int:
        """Permission bits of the path (e.g. 0o644)."""
        raise NotImplementedError


class LocalFileOperations(FileOperations):
    """FileOperations backed by the host filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_bytes(self, path: str, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)

    @contextmanager
    def open_write(self, path: str) -> Iterator[BinaryIO]:
        with open(path, "wb") as f:
            yield f

    def open_read(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def size(self, path: str) -> int:
        return os.stat(path).st_size

    def mtime_ns(self, path: str) -> int:
        return os.stat(path).st_mtime_ns

    def mode(self, path: str) -> int:
        return os.stat(path).st_mode & 0o7777

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for generated artifacts.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/gentree
    - Linux/Mac: ~/.gentree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# DIRECTORY SOURCES
# -----------------------------------------------------------------------------

def fixed_directory_source(path: str) -> Callable[[], str]:
    """
    Build a directory source that always supplies the same directory.

    The directory is created on each query if it has gone missing, so the
    source honours the 'existing, writable directory' contract.

    Args:
        path: Directory to supply; normalized to an absolute path.

    Returns:
        Callable[[], str]: Zero-argument directory source.
    """
    target = normalize_path(path, fallback=os.getcwd())

    def _source() -> str:
        ok, err = safe_mkdir(target)
        if not ok:
            raise OSError(f"Cannot prepare output directory '{target}': {err}")
        return target

    return _source
