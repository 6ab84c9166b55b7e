from __future__ import annotations

"""
Logging Configuration Model.

Immutable settings consumed by configure_logging(), plus the mapping from
level names accepted on the command line to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_LEVELS = tuple(_LEVEL_MAP)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Rotation threshold of the log file.
        backup_count: Number of rotated segments kept.
        console_fmt: Format of stderr records.
        file_fmt: Format of file records.
        datefmt: Timestamp format of file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "gentree: %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
