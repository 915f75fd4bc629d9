from __future__ import annotations

"""
Template Tree Data Models.

Provides the recursive node type produced by the tree builder. Each node
holds named child nodes (one per directory segment) and the ordered list
of template paths that terminate at that position.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from jinjaview.domain.constants import APP_UNIT

# -----------------------------------------------------------------------------
# TYPE ALIASES
# -----------------------------------------------------------------------------

# Ordered relative template paths of one unit, as found by the collector
PathSet = List[str]


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplateNode:
    """
    A position in the template tree.

    A node may carry children and leaves at the same time, so a template
    named ``admin`` and a directory named ``admin`` never overwrite each other.
    Children are copied into a read-only mapping on construction, so no two
    nodes ever share a mutable dict.

    Attributes:
        children: Child nodes keyed by path segment, in discovery order.
        leaves: Full relative paths of the templates stored at this node.
    """
    children: Mapping[str, "TemplateNode"] = field(default_factory=dict)
    leaves: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))
        object.__setattr__(self, "leaves", tuple(self.leaves))

    def is_empty(self) -> bool:
        return not self.children and not self.leaves

    def iter_leaves(self) -> Iterator[str]:
        """
        Yield every leaf of the subtree.

        Own leaves come first, then each child depth-first in insertion order.
        """
        yield from self.leaves
        for child in self.children.values():
            yield from child.iter_leaves()

    def leaf_count(self) -> int:
        return sum(1 for _ in self.iter_leaves())

    def subtree(self, segments: Sequence[str]) -> Optional[TemplateNode]:
        """
        Follow a chain of child keys.

        Args:
            segments: Directory segments, root to leaf.

        Returns:
            Optional[TemplateNode]: The node at that position, or None.
        """
        node: TemplateNode = self
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def find(
            self,
            reference: str,
            delimiter: str = "/",
            extensions: Sequence[str] = (),
    ) -> Optional[str]:
        """
        Resolve a template reference down to its stored leaf path.

        The reference is split on the delimiter; every segment but the last
        selects a child node, then the leaf list of that node is searched for
        the reference itself or the reference plus one of the extensions.

        Args:
            reference: Slashed reference such as ``admin/users/index``.
            delimiter: Segment separator used when the tree was built.
            extensions: Candidate file extensions, tried in order.

        Returns:
            Optional[str]: The stored leaf, or None if nothing matches.
        """
        segments = reference.split(delimiter)
        node = self.subtree(segments[:-1])
        if node is None:
            return None

        candidates = [reference] + [reference + ext for ext in extensions]
        for candidate in candidates:
            if candidate in node.leaves:
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree into plain dicts and lists (JSON friendly)."""
        return {
            "leaves": list(self.leaves),
            "children": {name: child.to_dict() for name, child in self.children.items()},
        }


EMPTY_TREE = TemplateNode()

# Unit name -> tree of that unit
ScanResult = Dict[str, TemplateNode]


def qualified_names(unit: str, tree: TemplateNode) -> List[str]:
    """
    List the leaves of a unit as loadable references.

    Application leaves are returned as-is, plugin leaves get a
    ``Plugin.`` prefix.
    """
    prefix = "" if unit == APP_UNIT else f"{unit}."
    return [prefix + leaf for leaf in tree.iter_leaves()]
