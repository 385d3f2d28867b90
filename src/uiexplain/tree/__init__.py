"""UI tree model and control resolution.

Instructions:
- Build UiNode instances (or any object matching TreeNode) and pass the node a
  gesture landed on to resolve_control.

Explanation:
- Groups the node model and the dual-hierarchy resolver for convenient imports.
"""

from .nodes import INTERACTIVE_KINDS, NodeKind, TreeNode, UiNode
from .resolver import MAX_HIERARCHY_DEPTH, resolve_control

__all__ = [
    "INTERACTIVE_KINDS",
    "MAX_HIERARCHY_DEPTH",
    "NodeKind",
    "TreeNode",
    "UiNode",
    "resolve_control",
]
