from __future__ import annotations

"""
Template Tree Builder.

Converts the flat relative paths discovered for each unit (application or
plugin) into a nested TemplateNode tree mirroring the directory layout.
The conversion is a pure function of its input: each call grows its own
mutable scratch tree and freezes it into TemplateNodes once at the end,
so the caller's data is never mutated and results share no state.
"""

import logging
from typing import Dict, List, Mapping, Sequence

from jinjaview.domain.constants import DEFAULT_DELIMITER
from jinjaview.domain.errors import InvalidInputError
from jinjaview.domain.tree_models import EMPTY_TREE, PathSet, ScanResult, TemplateNode

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_all(
        raw_scan: Mapping[str, PathSet],
        delimiter: str = DEFAULT_DELIMITER,
) -> ScanResult:
    """
    Convert the path set of every unit into its template tree.

    Units are independent of each other; an empty path set yields an
    empty tree and an empty mapping yields an empty result.

    Args:
        raw_scan: Unit name -> ordered relative paths.
        delimiter: Directory separator used inside the paths.

    Returns:
        ScanResult: Unit name -> TemplateNode.
    """
    result: ScanResult = {}
    for unit, paths in raw_scan.items():
        result[unit] = convert_to_tree(paths, delimiter=delimiter, unit=unit)

    logger.debug(f"Built template trees for {len(result)} unit(s)")
    return result


def build_one(
        unit_name: str,
        raw_paths: PathSet,
        delimiter: str = DEFAULT_DELIMITER,
) -> TemplateNode:
    """
    Convert the path set of a single unit.

    Same result as ``build_all({unit_name: raw_paths})[unit_name]`` without
    building a wrapping mapping.
    """
    return build_all({unit_name: raw_paths}, delimiter=delimiter)[unit_name]


def convert_to_tree(
        paths: Sequence[str],
        delimiter: str = DEFAULT_DELIMITER,
        unit: str = "",
) -> TemplateNode:
    """
    Turn an ordered set of relative paths into a tree.

    Paths without a delimiter stay at the root; every other path is split
    into segments and its full original value is stored as a leaf on the
    node of its parent directory.

    Args:
        paths: Relative paths in discovery order.
        delimiter: Directory separator used inside the paths.
        unit: Owning unit, only used in error context.

    Returns:
        TemplateNode: The root of the tree.

    Raises:
        InvalidInputError: If an entry is not a string.
        ValueError: If the delimiter is empty.
    """
    if not delimiter:
        raise ValueError("Path delimiter must be a non-empty string.")

    root = _NodeBuilder()
    for index, path in enumerate(paths):
        if not isinstance(path, str):
            raise InvalidInputError(unit=unit, index=index, value=path)

        node = root
        for segment in path.split(delimiter)[:-1]:
            node = node.child(segment)
        node.leaves.append(path)

    return root.freeze()


def branch(node: TemplateNode, segments: Sequence[str], path: str) -> TemplateNode:
    """
    Insert one path below a node, creating intermediate nodes as needed.

    Returns a new tree and leaves the given one untouched. Intended for
    single insertions; bulk conversion goes through convert_to_tree.

    Args:
        node: Node receiving the path.
        segments: Remaining segments; the last one is the file name.
        path: The full original path, stored as the leaf value.

    Returns:
        TemplateNode: A new node holding the inserted path.
    """
    head, rest = segments[0], segments[1:]
    if not rest:
        return TemplateNode(children=node.children, leaves=node.leaves + (path,))

    children = dict(node.children)
    children[head] = branch(children.get(head, EMPTY_TREE), rest, path)
    return TemplateNode(children=children, leaves=node.leaves)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

class _NodeBuilder:
    """Mutable node owned by a single convert_to_tree call."""

    __slots__ = ("children", "leaves")

    def __init__(self) -> None:
        self.children: Dict[str, _NodeBuilder] = {}
        self.leaves: List[str] = []

    def child(self, segment: str) -> _NodeBuilder:
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = _NodeBuilder()
        return node

    def freeze(self) -> TemplateNode:
        return TemplateNode(
            children={name: child.freeze() for name, child in self.children.items()},
            leaves=tuple(self.leaves),
        )
