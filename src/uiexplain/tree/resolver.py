from __future__ import annotations

"""Resolve the node a gesture landed on to the nearest interactive control.

Walk order per step:
1. interactive node -> done
2. text fragment -> jump to its owning container (fragments have no visual parent)
3. document root -> its logical parent, if that parent is interactive; else fail
4. otherwise visual parent when the node is rendered, logical parent when it is not,
   trying the other hierarchy when the preferred link is missing
"""

from typing import Optional

from uiexplain.tree.nodes import NodeKind, TreeNode

# Host hierarchies are acyclic; the bound only matters for malformed trees.
MAX_HIERARCHY_DEPTH = 256


def _next_parent(node: TreeNode) -> Optional[TreeNode]:
    if node.in_visual_tree:
        return node.visual_parent or node.logical_parent
    return node.logical_parent or node.visual_parent


def resolve_control(origin: Optional[TreeNode], *, max_depth: int = MAX_HIERARCHY_DEPTH) -> Optional[TreeNode]:
    current = origin
    for _ in range(max_depth):
        if current is None:
            return None

        if current.kind.is_interactive:
            return current

        if current.kind is NodeKind.TEXT_FRAGMENT:
            current = current.owning_container or current.logical_parent
            continue

        if current.kind is NodeKind.DOCUMENT_ROOT:
            parent = current.logical_parent
            if parent is not None and parent.kind.is_interactive:
                return parent
            return None

        current = _next_parent(current)

    return None
