from __future__ import annotations

"""
Environment Configuration Resolution.

Derives the Jinja2 environment options from the project configuration:
user supplied ``environment`` overrides first, then charset, debug and
cache defaults. The result is offered to listeners before the
environment is constructed.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from jinja2 import BaseLoader, Environment, FileSystemBytecodeCache

from jinjaview.core.view.events import EnvironmentConfigEvent, EventManager
from jinjaview.domain.constants import DEFAULT_CHARSET
from jinjaview.infra.fs import get_default_cache_dir

logger = logging.getLogger(__name__)

# Options consumed here rather than passed to jinja2.Environment
_RESERVED_KEYS = ("charset", "debug", "cache")


def read_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the user supplied environment overrides, or an empty dict."""
    env_config = config.get("environment")
    if not isinstance(env_config, dict):
        return {}
    return dict(env_config)


def resolve_config(
        config: Mapping[str, Any],
        events: Optional[EventManager] = None,
) -> Dict[str, Any]:
    """
    Build the environment options and let listeners adjust them.

    Without an explicit cache setting, caching is off in debug mode and
    uses the default cache directory otherwise; ``cache: true`` also
    selects the default directory.

    Args:
        config: Validated project configuration.
        events: Event manager receiving an EnvironmentConfigEvent.

    Returns:
        Dict[str, Any]: Options including 'charset', 'debug' and 'cache'.
    """
    debug = bool(config.get("debug", False))

    resolved = read_config(config)
    resolved.setdefault("charset", config.get("charset", DEFAULT_CHARSET))
    resolved.setdefault("debug", debug)
    resolved.setdefault("cache", False if debug else get_default_cache_dir())

    if resolved["cache"] is True:
        resolved["cache"] = get_default_cache_dir()

    if events is None:
        return resolved

    event = events.dispatch(EnvironmentConfigEvent(resolved))
    return event.get_config()


def build_environment(loader: BaseLoader, resolved: Mapping[str, Any]) -> Environment:
    """
    Construct the Jinja2 environment from resolved options.

    ``debug`` enables template auto reloading, a cache directory switches
    on the bytecode cache and every other key is passed through to
    ``jinja2.Environment``.

    Args:
        loader: Loader for the environment.
        resolved: Output of resolve_config().

    Returns:
        Environment: The configured environment.
    """
    options = {k: v for k, v in resolved.items() if k not in _RESERVED_KEYS}
    options.setdefault("auto_reload", bool(resolved.get("debug", False)))

    cache_dir = resolved.get("cache")
    if cache_dir:
        logger.debug(f"Bytecode cache enabled at {cache_dir}")
        options["bytecode_cache"] = FileSystemBytecodeCache(_ensure_dir(str(cache_dir)))

    return Environment(loader=loader, **options)


def _ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path
