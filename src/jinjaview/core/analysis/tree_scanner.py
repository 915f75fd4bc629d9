from __future__ import annotations

"""
Template Tree Scanner.

Facade joining template discovery and tree building: asks the collector
for the raw relative paths and hands them to the tree builder.
"""

from typing import Dict, Protocol

from jinjaview.core.analysis.tree_builder import build_all, build_one
from jinjaview.domain.constants import DEFAULT_DELIMITER
from jinjaview.domain.tree_models import PathSet, ScanResult, TemplateNode


class PathCollector(Protocol):
    """Anything able to list relative template paths per unit."""

    def all(self) -> Dict[str, PathSet]: ...

    def plugin(self, name: str) -> PathSet: ...


class TreeScanner:
    """
    Builds template trees for all units or for a single one.

    A fresh result is built on every call; callers that need caching
    (the loader) keep their own copy.
    """

    def __init__(self, collector: PathCollector, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.collector = collector
        self.delimiter = delimiter

    def all(self) -> ScanResult:
        """Return the tree of the application and of every plugin with templates."""
        return build_all(self.collector.all(), delimiter=self.delimiter)

    def plugin(self, name: str) -> TemplateNode:
        """
        Return the tree of one unit.

        Raises:
            UnitNotFoundError: If the unit is not registered.
        """
        return build_one(name, self.collector.plugin(name), delimiter=self.delimiter)
