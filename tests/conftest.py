from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for output directories and generated trees.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from gentree.core.singleton_tree import GeneratedSingletonFileTree  # noqa: E402
from gentree.infra.fs import FileOperations  # noqa: E402

# Fixed timestamp with a sub-second component (2023-11-14T22:13:20.75Z)
OLD_MTIME_NS = 1_700_000_000_750_000_000


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Existing, writable directory handed out by directory sources."""
    target = tmp_path / "generated"
    target.mkdir()
    return target


@pytest.fixture
def source_calls() -> List[int]:
    """Counter list appended to on every directory source query."""
    return []


@pytest.fixture
def directory_source(output_dir: Path, source_calls: List[int]) -> Callable[[], str]:
    """Directory source recording how often it is queried."""
    def _source() -> str:
        source_calls.append(1)
        return str(output_dir)

    return _source


@pytest.fixture
def make_tree(directory_source: Callable[[], str]) -> Callable[..., GeneratedSingletonFileTree]:
    """
    Factory for trees emitting fixed bytes into 'output_dir'.

    Returns:
        Callable[..., GeneratedSingletonFileTree]: make_tree(content, name="out.txt", fs=None).
    """
    def _make(content: bytes, name: str = "out.txt", fs: FileOperations | None = None) -> GeneratedSingletonFileTree:
        def _generate(sink: Any) -> None:
            sink.write(content)

        return GeneratedSingletonFileTree(directory_source, name, _generate, fs=fs)

    return _make


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """A complete, valid configuration dictionary."""
    return {
        "output_dir": str(tmp_path / "out"),
        "file_name": "manifest.json",
        "source_path": "-",
        "log_level": "INFO",
        "log_file": "",
    }


@pytest.fixture
def set_old_mtime() -> Callable[[Path], int]:
    """
    Backdate a file to OLD_MTIME_NS.

    Returns:
        Callable[[Path], int]: Function applying the timestamp and returning it.
    """
    def _apply(path: Path) -> int:
        os.utime(path, ns=(OLD_MTIME_NS, OLD_MTIME_NS))
        return OLD_MTIME_NS

    return _apply
