from __future__ import annotations

"""
Unit tests for the Template Unit Registry.

Verifies root resolution, plugin reference splitting and file lookup.
"""

import os
from pathlib import Path
from typing import Any, Dict

import pytest

from jinjaview.core.services.registry import UnitRegistry
from jinjaview.domain.errors import UnitNotFoundError


def test_from_config_resolves_relative_roots(tmp_path: Path) -> None:
    config = {"app_paths": ["templates"], "plugins": {"Blog": ["plugins/Blog/templates"]}}
    registry = UnitRegistry.from_config(config, base_dir=str(tmp_path))

    assert registry.paths_for("app") == [os.path.join(str(tmp_path), "templates")]
    assert registry.paths_for("Blog") == [os.path.join(str(tmp_path), "plugins", "Blog", "templates")]


def test_units_and_plugins(config_dict: Dict[str, Any]) -> None:
    registry = UnitRegistry.from_config(config_dict)

    assert registry.units() == ["app", "Blog", "Empty"]
    assert registry.plugins() == ["Blog", "Empty"]
    assert registry.has_unit("Blog")
    assert not registry.has_unit("Shop")


def test_reserved_plugin_name_rejected() -> None:
    with pytest.raises(ValueError):
        UnitRegistry(["templates"], {"app": ["elsewhere"]})


def test_unknown_unit_raises() -> None:
    registry = UnitRegistry(["templates"])

    with pytest.raises(UnitNotFoundError) as exc_info:
        registry.paths_for("Shop")

    assert exc_info.value.context["known"] == ["app"]


def test_plugins_with_templates(tmp_path: Path) -> None:
    present = tmp_path / "present"
    present.mkdir()
    registry = UnitRegistry([], {"Present": [str(present)], "Absent": [str(tmp_path / "absent")]})

    assert registry.plugins_with_templates() == ["Present"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Blog.posts/index", ("Blog", "posts/index")),
        ("posts/index", ("app", "posts/index")),
        ("index.jinja", ("app", "index.jinja")),
        ("Shop.cart", ("app", "Shop.cart")),
        ("app.index", ("app", "app.index")),
    ],
)
def test_split_reference(name: str, expected) -> None:
    registry = UnitRegistry(["templates"], {"Blog": ["blog"]})

    assert registry.split_reference(name) == expected


def test_locate_first_root_wins(tmp_path: Path) -> None:
    first = tmp_path / "override"
    second = tmp_path / "base"
    (first / "posts").mkdir(parents=True)
    (second / "posts").mkdir(parents=True)
    (first / "posts" / "index.jinja").write_text("override", encoding="utf-8")
    (second / "posts" / "index.jinja").write_text("base", encoding="utf-8")
    (second / "posts" / "view.jinja").write_text("base", encoding="utf-8")

    registry = UnitRegistry([str(first), str(second)])

    assert registry.locate("app", "posts/index.jinja") == str(first / "posts" / "index.jinja")
    assert registry.locate("app", "posts/view.jinja") == str(second / "posts" / "view.jinja")
    assert registry.locate("app", "posts/missing.jinja") is None
