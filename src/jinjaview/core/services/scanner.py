from __future__ import annotations

"""
Template Discovery Service.

Walks the template roots of the application and of every plugin and
returns, per unit, the relative paths of the template files found there.
The absolute root prefix is stripped and the remaining path is joined
with the configured delimiter so the output is platform independent.
"""

import logging
import os
from typing import Dict, Iterable, Optional, Sequence

from jinjaview.core.services.registry import UnitRegistry
from jinjaview.domain.constants import APP_UNIT, DEFAULT_DELIMITER, DEFAULT_EXTENSIONS
from jinjaview.domain.tree_models import PathSet

logger = logging.getLogger(__name__)


class RelativeScanner:
    """
    Collects relative template paths per unit.

    Usage:
        scanner = RelativeScanner(registry)
        scanner.all()          # {"app": [...], "Blog": [...]}
        scanner.plugin("Blog") # [...]
    """

    def __init__(
            self,
            registry: UnitRegistry,
            extensions: Optional[Sequence[str]] = None,
            delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self.registry = registry
        self.extensions = list(extensions) if extensions is not None else list(DEFAULT_EXTENSIONS)
        self.delimiter = delimiter

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def all(self) -> Dict[str, PathSet]:
        """
        Return the templates of the application and of every plugin.

        Units without any template are left out of the result.
        """
        sections: Dict[str, PathSet] = {APP_UNIT: self._scan_unit(APP_UNIT)}
        for plugin in self.registry.plugins_with_templates():
            sections[plugin] = self._scan_unit(plugin)

        return {unit: paths for unit, paths in sections.items() if paths}

    def plugin(self, name: str) -> PathSet:
        """
        Return the templates of a single unit.

        Raises:
            UnitNotFoundError: If the unit is not registered.
        """
        return self._scan_unit(name)

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _scan_unit(self, unit: str) -> PathSet:
        paths: PathSet = []
        for root in self.registry.paths_for(unit):
            if not os.path.isdir(root):
                logger.debug(f"Skipping missing template root for '{unit}': {root}")
                continue
            paths.extend(self._iterate_over_path(root))

        logger.debug(f"Unit '{unit}': {len(paths)} template(s) found")
        return paths

    def _iterate_over_path(self, root: str) -> Iterable[str]:
        """Yield the template files below root, relative to it."""
        for current, dirs, files in os.walk(root):
            # In-place pruning keeps os.walk out of hidden directories
            dirs[:] = sorted(d for d in dirs if not d.startswith("."))
            files.sort()

            for file_name in files:
                if file_name.startswith("."):
                    continue
                if not self._has_template_extension(file_name):
                    continue

                rel_path = os.path.relpath(os.path.join(current, file_name), root)
                yield self._to_delimited(rel_path)

    def _has_template_extension(self, file_name: str) -> bool:
        return any(file_name.endswith(ext) for ext in self.extensions)

    def _to_delimited(self, rel_path: str) -> str:
        return self.delimiter.join(rel_path.split(os.sep))