from __future__ import annotations

"""
Unit tests for environment option resolution and construction.

The default cache directory is patched so no test writes into the real
user data directory.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from jinja2 import DictLoader, FileSystemBytecodeCache

from jinjaview.core.view.environment import build_environment, read_config, resolve_config
from jinjaview.core.view.events import EventManager
from jinjaview.domain.constants import EVENT_ENVIRONMENT_CONFIG


@pytest.fixture
def default_cache(tmp_path: Path):
    target = str(tmp_path / "default-cache")
    with patch("jinjaview.core.view.environment.get_default_cache_dir", return_value=target):
        yield target

# -----------------------------------------------------------------------------
# RESOLUTION
# -----------------------------------------------------------------------------

def test_read_config_ignores_non_mapping() -> None:
    assert read_config({"environment": "x"}) == {}
    assert read_config({}) == {}
    assert read_config({"environment": {"trim_blocks": True}}) == {"trim_blocks": True}


def test_production_defaults_to_cache_dir(default_cache: str) -> None:
    resolved = resolve_config({"debug": False, "charset": "latin-1"})

    assert resolved == {"charset": "latin-1", "debug": False, "cache": default_cache}


def test_debug_disables_cache(default_cache: str) -> None:
    resolved = resolve_config({"debug": True})

    assert resolved["cache"] is False
    assert resolved["debug"] is True


def test_cache_true_selects_default_dir(default_cache: str) -> None:
    resolved = resolve_config({"debug": True, "environment": {"cache": True}})

    assert resolved["cache"] == default_cache


def test_explicit_overrides_win(default_cache: str) -> None:
    resolved = resolve_config({
        "debug": False,
        "charset": "utf-8",
        "environment": {"charset": "ascii", "cache": False},
    })

    assert resolved["charset"] == "ascii"
    assert resolved["cache"] is False


def test_listeners_may_replace_options(default_cache: str) -> None:
    events = EventManager()
    events.on(EVENT_ENVIRONMENT_CONFIG, lambda e: e.set_config({"cache": False, "autoescape": True}))

    resolved = resolve_config({"debug": False}, events)

    assert resolved == {"cache": False, "autoescape": True}

# -----------------------------------------------------------------------------
# CONSTRUCTION
# -----------------------------------------------------------------------------

def test_build_environment_passes_options() -> None:
    env = build_environment(
        DictLoader({}),
        {"charset": "utf-8", "debug": True, "cache": False, "trim_blocks": True},
    )

    assert env.trim_blocks is True
    assert env.auto_reload is True
    assert env.bytecode_cache is None


def test_build_environment_with_cache(tmp_path: Path) -> None:
    cache_dir = tmp_path / "bytecode"
    env = build_environment(DictLoader({}), {"debug": False, "cache": str(cache_dir)})

    assert isinstance(env.bytecode_cache, FileSystemBytecodeCache)
    assert env.auto_reload is False
    assert cache_dir.is_dir()


def test_build_environment_respects_auto_reload_override() -> None:
    env = build_environment(DictLoader({}), {"debug": True, "cache": False, "auto_reload": False})

    assert env.auto_reload is False
