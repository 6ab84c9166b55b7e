from __future__ import annotations

"""
Configuration Validation Service.

Normalizes untrusted configuration (JSON file, command line) into the
typed values the materializer expects. Lenient mode substitutes defaults
and reports warnings; strict mode raises ConfigError instead.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from gentree.domain.config import DEFAULT_LOG_FILE, STDIN_SOURCE, get_default_config
from gentree.domain.errors import ConfigError
from gentree.infra.fs import normalize_path
from gentree.infra.logging import LOG_LEVELS, get_default_log_path

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["output_dir", "file_name", "source_path", "log_level", "log_file"]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise ConfigError on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        _reject(msg, warnings, strict)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["output_dir"] = normalize_path(merged["output_dir"], fallback=defaults["output_dir"])
    if merged["log_file"] == DEFAULT_LOG_FILE:
        merged["log_file"] = get_default_log_path()
    elif merged["log_file"]:
        merged["log_file"] = normalize_path(merged["log_file"], fallback="")

    merged["file_name"] = _check_file_name(merged["file_name"], warnings, strict)
    merged["log_level"] = _check_log_level(merged["log_level"], warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigError(msg)
    warnings.append(msg)
    logger.warning(msg)


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _reject(
        f"Invalid field '{field}': expected str, received {type(value).__name__}. Using fallback.",
        warnings,
        strict,
    )
    return fallback


def _check_file_name(name: str, warnings: List[str], strict: bool) -> str:
    """A generated file name must be a single path segment."""
    if name and (os.path.basename(name) != name or name in (".", "..")):
        _reject(f"Invalid field 'file_name': '{name}' must not contain directories.", warnings, strict)
        return ""
    return name


def _check_log_level(level: str, warnings: List[str], strict: bool) -> str:
    upper = level.upper()
    if upper not in LOG_LEVELS:
        _reject(f"Unknown log level '{level}'. Using WARNING.", warnings, strict)
        return "WARNING"
    return upper


def is_stdin_source(source_path: str) -> bool:
    return source_path == STDIN_SOURCE
