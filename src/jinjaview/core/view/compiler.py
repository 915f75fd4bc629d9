from __future__ import annotations

"""
Template Cache Warmer.

Loads templates through a view's Jinja2 environment so their compiled
bytecode lands in the cache before the first request. Failures are
recorded per template instead of aborting the whole run.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List

from jinja2 import TemplateError

from jinjaview.core.view.view import JinjaView
from jinjaview.domain.errors import MissingTemplateError
from jinjaview.domain.tree_models import qualified_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of compiling one template.

    Attributes:
        name: Template reference that was compiled.
        ok: Whether compilation succeeded.
        error: Error message if it failed.
    """
    name: str
    ok: bool
    error: str = ""


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compile_all(view: JinjaView) -> List[CompileResult]:
    """Compile every template of the application and all plugins."""
    names: List[str] = []
    for unit, tree in view.scanner.all().items():
        names.extend(qualified_names(unit, tree))
    return _compile_many(view, names)


def compile_plugin(view: JinjaView, name: str) -> List[CompileResult]:
    """
    Compile every template of one plugin.

    Raises:
        UnitNotFoundError: If the plugin is not registered.
    """
    return _compile_many(view, qualified_names(name, view.scanner.plugin(name)))


def compile_file(view: JinjaView, path: str) -> CompileResult:
    """
    Compile a single template file.

    Raises:
        MissingTemplateError: If the file does not exist.
    """
    filename = os.path.abspath(path)
    if not os.path.isfile(filename):
        raise MissingTemplateError(template=path)
    return _compile_one(view, filename)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _compile_many(view: JinjaView, names: Iterable[str]) -> List[CompileResult]:
    results = [_compile_one(view, name) for name in names]
    failed = sum(1 for r in results if not r.ok)
    logger.info(f"Compiled {len(results) - failed} template(s), {failed} failure(s)")
    return results


def _compile_one(view: JinjaView, name: str) -> CompileResult:
    try:
        view.environment.get_template(name)
    except (TemplateError, UnicodeDecodeError, OSError) as e:
        # Undecodable or unreadable files count as failed templates
        logger.error(f"Failed to compile '{name}': {e}")
        return CompileResult(name=name, ok=False, error=str(e))

    logger.debug(f"Compiled '{name}'")
    return CompileResult(name=name, ok=True)
