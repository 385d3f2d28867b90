from __future__ import annotations

"""Turn a resolved control plus its event descriptors into one explanation prompt."""

from dataclasses import dataclass
from typing import Sequence

from uiexplain.events.discovery import EventDescriptor, render_handler_report
from uiexplain.tree.nodes import HINT_ATTRIBUTES, UiNode

NO_VISUAL_HINTS = "(no visual hints)"
NO_HANDLERS = "(No event handlers detected; this component does not perform any actions)"


@dataclass(frozen=True)
class ExplanationRequest:
    control_kind: str
    control_name: str
    snippet: str
    visual_hints: str
    handler_report: str

    @property
    def has_handlers(self) -> bool:
        return self.handler_report != NO_HANDLERS

    @property
    def prompt(self) -> str:
        return "\n".join(
            [
                f"The user clicked on a {self.control_kind} named '{self.control_name}'.",
                "",
                "Markup:",
                self.snippet,
                "",
                f"Visual hints: {self.visual_hints}",
                "",
                "Event handlers with code:",
                self.handler_report,
                "",
                "Explain in simple terms what this component does and how it behaves.",
            ]
        )


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("\n", " ")


def build_snippet(node: UiNode) -> str:
    parts = [f'<{node.kind.value} Name="{_escape_attr(node.name)}"']
    for key in HINT_ATTRIBUTES:
        value = node.attributes.get(key)
        if value is not None and str(value).strip():
            parts.append(f'{key}="{_escape_attr(str(value).strip())}"')
    return " ".join(parts) + " />"


def build_request(node: UiNode, descriptors: Sequence[EventDescriptor]) -> ExplanationRequest:
    hints = node.visual_hints()
    report = render_handler_report(descriptors)
    return ExplanationRequest(
        control_kind=node.kind.value,
        control_name=node.display_name,
        snippet=build_snippet(node),
        visual_hints="; ".join(hints) if hints else NO_VISUAL_HINTS,
        handler_report="\n\n".join(report) if report else NO_HANDLERS,
    )
