from __future__ import annotations

"""
Unit tests for the ASCII tree renderer.
"""

from typing import List

from jinjaview.core.analysis.tree_builder import convert_to_tree
from jinjaview.core.analysis.tree_renderer import render_tree_structure
from jinjaview.domain.tree_models import EMPTY_TREE


def test_render_directories_before_templates() -> None:
    lines: List[str] = []
    render_tree_structure(convert_to_tree(["index", "admin/users", "admin/roles/list"]), lines)

    assert lines == [
        "├── admin",
        "│   ├── roles",
        "│   │   └── list",
        "│   └── users",
        "└── index",
    ]


def test_render_uses_delimiter_for_labels() -> None:
    lines: List[str] = []
    render_tree_structure(convert_to_tree(["posts:index"], delimiter=":"), lines, delimiter=":")

    assert lines == ["└── posts", "    └── index"]


def test_render_empty_tree() -> None:
    lines: List[str] = []
    render_tree_structure(EMPTY_TREE, lines)

    assert lines == []
