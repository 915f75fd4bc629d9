from __future__ import annotations

"""
Tree Renderer.

Converts TemplateNode trees into visual ASCII representations for the
command line.
"""

from typing import List, Optional, Tuple

from jinjaview.domain.constants import DEFAULT_DELIMITER
from jinjaview.domain.tree_models import TemplateNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        node: TemplateNode,
        lines: List[str],
        prefix: str = "",
        delimiter: str = DEFAULT_DELIMITER,
) -> None:
    """
    Recursively transform a TemplateNode into a list of strings.

    Directories are listed first (sorted), then the templates stored at
    the node, shown by their file name.

    Args:
        node: Current node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        delimiter: Separator used inside the stored leaf paths.
    """
    entries: List[Tuple[str, Optional[TemplateNode]]] = [
        (name, node.children[name]) for name in sorted(node.children)
    ]
    entries.extend((leaf.split(delimiter)[-1], None) for leaf in node.leaves)
    total = len(entries)

    for i, (label, child) in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{label}")

        if child is not None:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(child, lines, prefix=new_prefix, delimiter=delimiter)
