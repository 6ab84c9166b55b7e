from __future__ import annotations

"""
Logging Handler Factories.

Handlers created here carry a marker attribute so that re-configuration
removes only what this package installed and leaves handlers added by the
host build tool untouched.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_gentree_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_stream_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a size-rotated log file, creating its parent directory.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
        cannot be opened (a warning is written to stderr instead).
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
