from __future__ import annotations

"""
Domain Constants.

Centralizes the naming conventions shared by the scanner, the loader and
the view layer: the reserved application unit, template extensions,
directory conventions and configuration versioning.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"
CONFIG_FILENAME = "jinjaview.json"

# Reserved unit name for the main application (plugins use their own names)
APP_UNIT = "app"

# -----------------------------------------------------------------------------
# TEMPLATE CONVENTIONS
# -----------------------------------------------------------------------------
TEMPLATE_EXT = ".jinja"
DEFAULT_EXTENSIONS: List[str] = [TEMPLATE_EXT, ".html"]
DEFAULT_DELIMITER = "/"
DEFAULT_CHARSET = "utf-8"

LAYOUT_DIR = "layout"
ELEMENT_DIR = "element"
DEFAULT_LAYOUT = "default"

CACHE_SUBDIR = "jinjaview"

# -----------------------------------------------------------------------------
# EVENT NAMES
# -----------------------------------------------------------------------------
EVENT_CONSTRUCT = "JinjaView.construct"
EVENT_ENVIRONMENT_CONFIG = "JinjaView.environment_config"
EVENT_LOADER = "JinjaView.loader"
