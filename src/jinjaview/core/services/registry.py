from __future__ import annotations

"""
Template Unit Registry.

Acts as the single authority on where templates live: the application's
template roots and the roots declared by each installed plugin. Scanner,
loader and view all ask the registry instead of guessing paths.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from jinjaview.domain.constants import APP_UNIT, DEFAULT_DELIMITER
from jinjaview.domain.errors import UnitNotFoundError

logger = logging.getLogger(__name__)


class UnitRegistry:
    """
    Maps unit names (the application or a plugin) to template search roots.

    Roots are kept in declaration order; earlier roots win when the same
    relative template exists in several of them.
    """

    def __init__(
            self,
            app_paths: Sequence[str],
            plugins: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self._paths: Dict[str, List[str]] = {APP_UNIT: [os.path.abspath(p) for p in app_paths]}
        for name, roots in (plugins or {}).items():
            if name == APP_UNIT:
                raise ValueError(f"Plugin name '{APP_UNIT}' is reserved for the application.")
            self._paths[name] = [os.path.abspath(p) for p in roots]

    @classmethod
    def from_config(cls, config: Mapping[str, Any], base_dir: str = "") -> UnitRegistry:
        """
        Build a registry from a validated configuration dictionary.

        Args:
            config: Configuration holding 'app_paths' and 'plugins'.
            base_dir: Directory that relative roots are resolved against.

        Returns:
            UnitRegistry: The populated registry.
        """
        base = os.path.abspath(base_dir or os.getcwd())

        def _resolve(paths: Sequence[str]) -> List[str]:
            return [p if os.path.isabs(p) else os.path.join(base, p) for p in paths]

        plugins = {name: _resolve(roots) for name, roots in config.get("plugins", {}).items()}
        return cls(_resolve(config.get("app_paths", [])), plugins)

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def units(self) -> List[str]:
        return list(self._paths)

    def plugins(self) -> List[str]:
        return [name for name in self._paths if name != APP_UNIT]

    def has_unit(self, name: str) -> bool:
        return name in self._paths

    def paths_for(self, unit: str) -> List[str]:
        """
        Return the template roots of a unit.

        Raises:
            UnitNotFoundError: If the unit is not registered.
        """
        if unit not in self._paths:
            raise UnitNotFoundError(unit=unit, known=self.units())
        return list(self._paths[unit])

    def plugins_with_templates(self) -> List[str]:
        """List plugins that have at least one existing template root."""
        return [
            name for name in self.plugins()
            if any(os.path.isdir(p) for p in self._paths[name])
        ]

    def split_reference(self, name: str) -> Tuple[str, str]:
        """
        Split a ``Plugin.template`` reference into (unit, template).

        The prefix is only treated as a plugin when such a plugin is
        registered, so ``index.jinja`` stays an application template.
        """
        if "." in name:
            prefix, rest = name.split(".", 1)
            if prefix != APP_UNIT and prefix in self._paths:
                return prefix, rest
        return APP_UNIT, name

    def locate(
            self,
            unit: str,
            relative_path: str,
            delimiter: str = DEFAULT_DELIMITER,
    ) -> Optional[str]:
        """
        Find the absolute file behind a unit-relative template path.

        Args:
            unit: Owning unit.
            relative_path: Path relative to a template root.
            delimiter: Separator used inside relative_path.

        Returns:
            Optional[str]: First existing file across the unit's roots.
        """
        native = relative_path.replace(delimiter, os.sep)
        for root in self.paths_for(unit):
            candidate = os.path.join(root, native)
            if os.path.isfile(candidate):
                return candidate

        logger.debug(f"Template '{relative_path}' not found in unit '{unit}'")
        return None
