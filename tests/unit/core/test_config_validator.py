from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies type coercion, extension and delimiter normalization, plugin map
cleanup and strict mode failures.
"""

from typing import Any, Dict

import pytest

from jinjaview.core.config_validator import validate_config
from jinjaview.domain.config import get_default_config

# -----------------------------------------------------------------------------
# LENIENT MODE
# -----------------------------------------------------------------------------

def test_valid_config_passes_unchanged(config_dict: Dict[str, Any]) -> None:
    cfg, warnings = validate_config(config_dict)

    assert warnings == []
    assert cfg["plugins"] == config_dict["plugins"]
    assert cfg["extensions"] == [".jinja", ".html"]


def test_non_dict_returns_defaults() -> None:
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg == get_default_config()
    assert len(warnings) == 1


def test_bool_coercion() -> None:
    cfg, warnings = validate_config({"debug": "yes"})

    assert cfg["debug"] is True
    assert any("debug" in w for w in warnings)


def test_extensions_csv_and_dot_fix() -> None:
    cfg, warnings = validate_config({"extensions": "jinja, .html"})

    assert cfg["extensions"] == [".jinja", ".html"]
    assert len(warnings) == 2


def test_empty_extensions_fall_back() -> None:
    cfg, _ = validate_config({"extensions": []})

    assert cfg["extensions"] == [".jinja", ".html"]


@pytest.mark.parametrize("value", ["", "::", 3])
def test_invalid_delimiter_falls_back(value: Any) -> None:
    cfg, warnings = validate_config({"delimiter": value})

    assert cfg["delimiter"] == "/"
    assert warnings


def test_plugins_normalized() -> None:
    cfg, warnings = validate_config({
        "plugins": {"Blog": "plugins/Blog/templates", "app": ["x"], "Shop": ["a", 5]},
    })

    assert cfg["plugins"] == {"Blog": ["plugins/Blog/templates"], "Shop": ["a"]}
    assert any("reserved" in w for w in warnings)
    assert any("plugins.Shop[1]" in w for w in warnings)


def test_environment_must_be_mapping() -> None:
    cfg, warnings = validate_config({"environment": "fast"})

    assert cfg["environment"] == {}
    assert warnings

# -----------------------------------------------------------------------------
# STRICT MODE
# -----------------------------------------------------------------------------

def test_strict_rejects_non_dict() -> None:
    with pytest.raises(TypeError):
        validate_config(None, strict=True)


def test_strict_rejects_bad_extension() -> None:
    with pytest.raises(ValueError):
        validate_config({"extensions": ["jinja"]}, strict=True)


def test_strict_rejects_reserved_plugin() -> None:
    with pytest.raises(ValueError):
        validate_config({"plugins": {"app": ["x"]}}, strict=True)


def test_strict_rejects_string_debug() -> None:
    with pytest.raises(TypeError):
        validate_config({"debug": "yes"}, strict=True)
