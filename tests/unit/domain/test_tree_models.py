from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. RelativePath accessors.
2. Immutability of frozen dataclasses.
3. The exception hierarchy.
"""

import dataclasses
import os

import pytest

from gentree.domain.errors import (
    ConfigError,
    GeneratedTreeError,
    GenerationError,
    UnsupportedOperationError,
)
from gentree.domain.tree_models import EntryKind, RelativePath, ResolvedFile


def test_relative_path_accessors() -> None:
    rel = RelativePath(True, ("reports", "manifest.json"))

    assert rel.last_name == "manifest.json"
    assert rel.path_string == "reports/manifest.json"
    assert str(rel) == "reports/manifest.json"
    assert rel.get_file("/base") == os.path.join("/base", "reports", "manifest.json")


def test_empty_relative_path() -> None:
    assert RelativePath(False, ()).last_name == ""


def test_resolved_file_is_frozen() -> None:
    resolved = ResolvedFile(path="/tmp/x", size=1, last_modified=10)

    assert resolved.written is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        resolved.size = 2  # type: ignore[misc]


def test_entry_kind_values() -> None:
    assert {k.value for k in EntryKind} == {"file", "directory"}


def test_error_hierarchy() -> None:
    assert issubclass(GenerationError, GeneratedTreeError)
    assert issubclass(GenerationError, OSError)
    assert issubclass(UnsupportedOperationError, GeneratedTreeError)
    assert issubclass(ConfigError, ValueError)
    assert str(GenerationError("boom")) == "boom"
