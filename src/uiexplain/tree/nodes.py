from __future__ import annotations

"""UI node model shared by the resolver, the event discoverer and the prompt builder.

A node sits in two independent parent-link structures:
- the visual hierarchy (what is rendered inside what), and
- the logical hierarchy (what owns what structurally).

Text fragments living inside a rich document have no visual parent at all; they
point at their owning container instead.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, Tuple


class NodeKind(str, Enum):
    BUTTON = "Button"
    TEXT_INPUT = "TextInput"
    CHOICE_LIST = "ChoiceList"
    SELECTABLE_LIST = "SelectableList"
    RICH_TEXT_AREA = "RichTextArea"
    TEXT_FRAGMENT = "TextContentFragment"
    DOCUMENT_ROOT = "DocumentRoot"
    OTHER = "Other"

    @property
    def is_interactive(self) -> bool:
        return self in INTERACTIVE_KINDS

    @property
    def events(self) -> Tuple[str, ...]:
        """Behavior names a control of this kind exposes."""
        return _EXPOSED_EVENTS.get(self, ())

    @property
    def default_event(self) -> str | None:
        return _DEFAULT_EVENTS.get(self)

    @classmethod
    def parse(cls, value: str) -> "NodeKind":
        """Accept either the enum value ("TextInput") or member name ("text_input")."""
        for kind in cls:
            if value == kind.value or value.upper() == kind.name:
                return kind
        raise ValueError(f"Unknown node kind: {value!r}")


INTERACTIVE_KINDS = frozenset(
    {
        NodeKind.BUTTON,
        NodeKind.TEXT_INPUT,
        NodeKind.CHOICE_LIST,
        NodeKind.SELECTABLE_LIST,
        NodeKind.RICH_TEXT_AREA,
    }
)

_COMMON_EVENTS: Tuple[str, ...] = ("GotFocus", "LostFocus", "MouseEnter", "MouseLeave")

_EXPOSED_EVENTS: Dict[NodeKind, Tuple[str, ...]] = {
    NodeKind.BUTTON: ("Click",) + _COMMON_EVENTS,
    NodeKind.TEXT_INPUT: ("TextChanged", "KeyDown") + _COMMON_EVENTS,
    NodeKind.CHOICE_LIST: ("SelectionChanged", "DropDownOpened", "DropDownClosed") + _COMMON_EVENTS,
    NodeKind.SELECTABLE_LIST: ("SelectionChanged", "MouseDoubleClick") + _COMMON_EVENTS,
    NodeKind.RICH_TEXT_AREA: ("TextChanged", "SelectionChanged", "KeyDown") + _COMMON_EVENTS,
}

# Only these kinds have a handler name worth guessing from the naming convention.
_DEFAULT_EVENTS: Dict[NodeKind, str] = {
    NodeKind.BUTTON: "Click",
    NodeKind.CHOICE_LIST: "SelectionChanged",
    NodeKind.TEXT_INPUT: "TextChanged",
}

# Display attributes forwarded as visual hints, in output order.
HINT_ATTRIBUTES: Tuple[str, ...] = ("Content", "Text", "ToolTip", "Tag")


class TreeNode(Protocol):
    """What the resolver needs from a node; UiNode is the stock implementation."""

    kind: NodeKind
    visual_parent: Optional["TreeNode"]
    logical_parent: Optional["TreeNode"]
    owning_container: Optional["TreeNode"]
    in_visual_tree: bool


@dataclass(eq=False)
class UiNode:
    kind: NodeKind
    name: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    visual_parent: Optional["UiNode"] = None
    logical_parent: Optional["UiNode"] = None
    # Only meaningful for text fragments: the structural element holding the text.
    owning_container: Optional["UiNode"] = None
    in_visual_tree: bool = True

    def __post_init__(self) -> None:
        if self.kind in (NodeKind.TEXT_FRAGMENT, NodeKind.DOCUMENT_ROOT):
            self.in_visual_tree = False

    @property
    def is_text_fragment(self) -> bool:
        return self.kind is NodeKind.TEXT_FRAGMENT

    @property
    def display_name(self) -> str:
        return self.name or "(unnamed)"

    def place_in(self, parent: "UiNode") -> "UiNode":
        """Attach under ``parent`` in both hierarchies. Returns self for chaining."""
        self.visual_parent = parent
        self.logical_parent = parent
        return self

    def visual_hints(self) -> List[str]:
        hints: List[str] = []
        for key in HINT_ATTRIBUTES:
            value = self.attributes.get(key)
            if value is None:
                continue
            value = str(value).strip()
            if value:
                hints.append(f"{key}: {value}")
        return hints

    def __repr__(self) -> str:
        return f"UiNode({self.kind.value}, {self.display_name})"
