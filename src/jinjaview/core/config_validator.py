from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration (JSON file, CLI) and the scanner,
loader and view. Coerces types, normalizes extensions and fills missing
keys with defaults, collecting a warning for every correction made.
"""

import logging
from typing import Any, Dict, List, Tuple

from jinjaview.domain.config import get_default_config
from jinjaview.domain.constants import APP_UNIT, DEFAULT_DELIMITER, DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["charset"] = _as_str(merged.get("charset"), defaults["charset"], "charset", warnings, strict)
    merged["debug"] = _as_bool(merged.get("debug"), defaults["debug"], "debug", warnings, strict)
    merged["app_paths"] = _as_list_str(
        merged.get("app_paths"), defaults["app_paths"], "app_paths", warnings, strict
    )
    merged["extensions"] = _normalize_extensions(
        _as_list_str(merged.get("extensions"), DEFAULT_EXTENSIONS, "extensions", warnings, strict),
        warnings,
        strict,
    )
    merged["delimiter"] = _as_delimiter(merged.get("delimiter"), warnings, strict)
    merged["plugins"] = _as_plugins(merged.get("plugins"), warnings, strict)
    merged["environment"] = _as_dict(merged.get("environment"), "environment", warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_dict(value: Any, field: str, warnings: List[str], strict: bool) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)

    msg = f"Invalid field '{field}': expected dict, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using empty mapping.")
    return {}


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all file extensions are prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out if out else list(DEFAULT_EXTENSIONS)


def _as_delimiter(value: Any, warnings: List[str], strict: bool) -> str:
    """The delimiter must be exactly one character."""
    if value is None:
        return DEFAULT_DELIMITER
    if isinstance(value, str) and len(value) == 1:
        return value

    msg = f"Invalid field 'delimiter': expected a single character, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{DEFAULT_DELIMITER}'.")
    return DEFAULT_DELIMITER


def _as_plugins(value: Any, warnings: List[str], strict: bool) -> Dict[str, List[str]]:
    """Normalize the plugin map: name -> list of template roots."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Invalid field 'plugins': expected dict, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using empty mapping.")
        return {}

    out: Dict[str, List[str]] = {}
    for name, roots in value.items():
        if name == APP_UNIT:
            msg = f"Plugin name '{APP_UNIT}' is reserved for the application."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Plugin discarded.")
            continue
        if isinstance(roots, str):
            roots = [roots]
        out[str(name)] = _as_list_str(roots, [], f"plugins.{name}", warnings, strict)
    return out
