from __future__ import annotations

"""
Generated Content Change Detection.

Decides whether freshly generated bytes differ from what is already stored
at a target path. A cheap length comparison rejects most changes; only
equal-length candidates pay for a full read. Any failure to inspect the
existing file is reported as a change so that stale bytes are never served.
"""

import logging

from gentree.infra.fs import FileOperations

logger = logging.getLogger(__name__)


def has_content(generated: bytes, path: str, fs: FileOperations) -> bool:
    """
    Check whether the file at 'path' holds exactly the generated bytes.

    Args:
        generated: Candidate content.
        path: Existing target file.
        fs: File operations capability used to inspect the target.

    Returns:
        bool: True only when both length and bytes match.
    """
    try:
        if fs.size(path) != len(generated):
            return False
        existing = fs.read_bytes(path)
    except OSError as e:
        logger.warning(f"Could not read '{path}' for comparison, assuming changed: {e}")
        return False

    return existing == generated


def content_changed(generated: bytes, path: str, fs: FileOperations) -> bool:
    """Negation of has_content; True when the target must be rewritten."""
    return not has_content(generated, path, fs)
