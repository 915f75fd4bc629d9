from __future__ import annotations

"""
Tree-backed Jinja2 Loader.

Resolves template references through the per-unit template trees built
by the TreeScanner. ``posts/index`` is looked up in the application tree,
``Blog.posts/index`` in the tree of the Blog plugin; the extension may be
omitted. Trees are built lazily per unit and cached until invalidated.
"""

import logging
import os
import threading
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from jinja2 import BaseLoader, Environment, TemplateNotFound

from jinjaview.core.analysis.tree_scanner import TreeScanner
from jinjaview.core.services.registry import UnitRegistry
from jinjaview.core.services.scanner import RelativeScanner
from jinjaview.domain.constants import DEFAULT_CHARSET, DEFAULT_DELIMITER, DEFAULT_EXTENSIONS
from jinjaview.domain.tree_models import TemplateNode, qualified_names

logger = logging.getLogger(__name__)


class TreeLoader(BaseLoader):
    """
    Jinja2 loader resolving references via template trees.

    Usage:
        loader = TreeLoader(registry)
        env = Environment(loader=loader)
        env.get_template("Blog.posts/index")
    """

    def __init__(
            self,
            registry: UnitRegistry,
            extensions: Optional[Sequence[str]] = None,
            delimiter: str = DEFAULT_DELIMITER,
            charset: str = DEFAULT_CHARSET,
    ) -> None:
        self.registry = registry
        self.extensions = list(extensions) if extensions is not None else list(DEFAULT_EXTENSIONS)
        self.delimiter = delimiter
        self.charset = charset
        self.scanner = TreeScanner(
            RelativeScanner(registry, self.extensions, delimiter),
            delimiter=delimiter,
        )
        self._trees: Dict[str, TemplateNode] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # JINJA2 LOADER PROTOCOL
    # -------------------------------------------------------------------------

    def get_source(
            self, environment: Environment, template: str
    ) -> Tuple[str, str, Callable[[], bool]]:
        filename = self.resolve_filename(template)
        if filename is None:
            raise TemplateNotFound(template)

        mtime = os.path.getmtime(filename)
        with open(filename, "r", encoding=self.charset) as f:
            source = f.read()

        def uptodate() -> bool:
            try:
                return os.path.getmtime(filename) == mtime
            except OSError:
                return False

        return source, filename, uptodate

    def list_templates(self) -> List[str]:
        """All known templates; plugin templates are prefixed with ``Plugin.``."""
        names: List[str] = []
        for unit, tree in self.scanner.all().items():
            names.extend(qualified_names(unit, tree))
        return sorted(names)

    # -------------------------------------------------------------------------
    # RESOLUTION
    # -------------------------------------------------------------------------

    def resolve_filename(self, template: str) -> Optional[str]:
        """
        Map a template reference to an absolute file.

        Existing absolute paths are returned unchanged, which lets the view
        hand over files it already located.

        Args:
            template: Reference such as ``posts/index`` or ``Blog.posts/index.jinja``.

        Returns:
            Optional[str]: The file, or None if the template is unknown.
        """
        if os.path.isabs(template) and os.path.isfile(template):
            return template

        unit, reference = self.registry.split_reference(template)
        leaf = self.tree(unit).find(reference, self.delimiter, self.extensions)
        if leaf is None:
            logger.debug(f"No template matches '{template}' in unit '{unit}'")
            return None

        return self.registry.locate(unit, leaf, self.delimiter)

    def tree(self, unit: str) -> TemplateNode:
        """
        Return the cached tree of a unit, building it on first use.

        Raises:
            UnitNotFoundError: If the unit is not registered.
        """
        with self._lock:
            if unit not in self._trees:
                self._trees[unit] = self.scanner.plugin(unit)
            return self._trees[unit]

    def invalidate(self) -> None:
        """Forget every cached tree; the next lookup rescans the disk."""
        with self._lock:
            self._trees.clear()
