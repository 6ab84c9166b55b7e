from __future__ import annotations

"""
Configuration Domain Management.

Dict-based settings for the command line materializer. Values come from
the built-in defaults, an optional JSON file, and command line overrides,
in that order of precedence.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from gentree.infra.fs import GENERATED_SUBDIR, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
STDIN_SOURCE = "-"
DEFAULT_LOG_FILE = "default"


def get_default_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "output_dir": os.path.join(get_user_data_dir(), GENERATED_SUBDIR),
        "file_name": "",
        "source_path": STDIN_SOURCE,
        "log_level": "WARNING",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file merged over the defaults.

    Unknown keys are dropped. A missing, unreadable or malformed file yields
    the defaults.

    Args:
        path: Config file; the user data directory copy when omitted.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config_path = path or get_default_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file '{config_path}' not found. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return config

    for key in config:
        if key in data:
            config[key] = data[key]
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration as JSON.

    Args:
        config: Settings to store.
        path: Target file; the user data directory copy when omitted.
    """
    config_path = path or get_default_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
