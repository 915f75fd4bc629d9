from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A temporary application with one plugin and their template roots.
3. A configuration dictionary pointing at that application.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def template_project(tmp_path: Path) -> Path:
    """
    Create a temporary application with templates.

    Structure:
    /project
      /templates
        index.jinja
        /admin
          users.jinja
          /roles
            list.jinja
        /element
          menu.html
        /layout
          default.jinja
        notes.txt
        .hidden.jinja
      /plugins/Blog/templates
        /posts
          index.jinja
      /plugins/Empty/templates
    """
    root = tmp_path / "project"
    templates = root / "templates"
    (templates / "admin" / "roles").mkdir(parents=True)
    (templates / "element").mkdir()
    (templates / "layout").mkdir()

    (templates / "index.jinja").write_text("Hello {{ name }}", encoding="utf-8")
    (templates / "admin" / "users.jinja").write_text("Users", encoding="utf-8")
    (templates / "admin" / "roles" / "list.jinja").write_text("Roles", encoding="utf-8")
    (templates / "element" / "menu.html").write_text("<nav>{{ current }}</nav>", encoding="utf-8")
    (templates / "layout" / "default.jinja").write_text("<main>{{ content }}</main>", encoding="utf-8")
    (templates / "notes.txt").write_text("not a template", encoding="utf-8")
    (templates / ".hidden.jinja").write_text("hidden", encoding="utf-8")

    posts = root / "plugins" / "Blog" / "templates" / "posts"
    posts.mkdir(parents=True)
    (posts / "index.jinja").write_text("Posts: {{ posts|length }}", encoding="utf-8")

    (root / "plugins" / "Empty" / "templates").mkdir(parents=True)

    return root


@pytest.fixture
def config_dict(template_project: Path, tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration for the temporary application.

    The bytecode cache points into tmp_path so tests never touch the
    real user data directory.
    """
    return {
        "version": "1.0.0",
        "app_paths": [str(template_project / "templates")],
        "plugins": {
            "Blog": [str(template_project / "plugins" / "Blog" / "templates")],
            "Empty": [str(template_project / "plugins" / "Empty" / "templates")],
        },
        "extensions": [".jinja", ".html"],
        "delimiter": "/",
        "debug": False,
        "charset": "utf-8",
        "environment": {"cache": str(tmp_path / "cache")},
    }
