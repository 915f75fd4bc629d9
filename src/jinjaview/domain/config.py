from __future__ import annotations

"""
Configuration Domain Management.

Handles the project-level JSON configuration: template roots of the
application and its plugins, the template extensions, the path delimiter
and the options forwarded to the Jinja2 environment.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from jinjaview.domain.constants import (
    CONFIG_FILENAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_CHARSET,
    DEFAULT_DELIMITER,
    DEFAULT_EXTENSIONS,
)

logger = logging.getLogger(__name__)

# Keys accepted from a config file; anything else is ignored
_KNOWN_KEYS = (
    "app_paths", "plugins", "extensions", "delimiter",
    "debug", "charset", "environment",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,

        # Template roots
        "app_paths": ["templates"],
        "plugins": {},

        # Discovery
        "extensions": list(DEFAULT_EXTENSIONS),
        "delimiter": DEFAULT_DELIMITER,

        # Environment
        "debug": False,
        "charset": DEFAULT_CHARSET,
        "environment": {},
    }


def default_config_path(base_dir: Optional[str] = None) -> str:
    return os.path.join(base_dir or os.getcwd(), CONFIG_FILENAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration from disk, merged over the defaults.

    A missing or unreadable file yields the defaults.

    Args:
        path: Config file location. Defaults to ./jinjaview.json.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config_file = path or default_config_path()

    if not os.path.exists(config_file):
        logger.debug(f"Config file not found at {config_file}. Returning defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key in _KNOWN_KEYS:
        if key in data:
            config[key] = data[key]

    config["version"] = CURRENT_CONFIG_VERSION
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Target file. Defaults to ./jinjaview.json.
    """
    config_file = path or default_config_path()
    data = dict(config)
    data["version"] = CURRENT_CONFIG_VERSION

    parent = os.path.dirname(os.path.abspath(config_file))
    os.makedirs(parent, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {config_file}")
