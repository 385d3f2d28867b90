"""Tests for explanation request building.

Instructions:
- Run via `pytest tests/test_prompt.py`.

Explanation:
- Checks the tag-like snippet, visual hint joining and the no-hints/no-handlers sentinels.
"""

from uiexplain.corpus.extractor import MatchStatus, SourceMatch
from uiexplain.events.discovery import DiscoveryPhase, EventDescriptor
from uiexplain.reasoning.prompt import NO_HANDLERS, NO_VISUAL_HINTS, build_request
from uiexplain.tree.nodes import NodeKind, UiNode


def test_request_without_hints_or_handlers() -> None:
    request = build_request(UiNode(NodeKind.TEXT_INPUT, name="txtNotes"), [])

    assert request.control_kind == "TextInput"
    assert request.control_name == "txtNotes"
    assert request.snippet == '<TextInput Name="txtNotes" />'
    assert request.visual_hints == NO_VISUAL_HINTS
    assert request.handler_report == NO_HANDLERS
    assert not request.has_handlers


def test_visual_hints_and_snippet_attributes() -> None:
    node = UiNode(
        NodeKind.BUTTON,
        name="btnReport",
        attributes={"Content": "Report Issue", "ToolTip": 'Log a "pothole"', "Tag": "  ", "Custom": "x"},
    )
    request = build_request(node, [])

    assert request.visual_hints == 'Content: Report Issue; ToolTip: Log a "pothole"'
    assert request.snippet == '<Button Name="btnReport" Content="Report Issue" ToolTip="Log a &quot;pothole&quot;" />'


def test_unnamed_control_display_name() -> None:
    request = build_request(UiNode(NodeKind.CHOICE_LIST), [])
    assert request.control_name == "(unnamed)"
    assert "a ChoiceList named '(unnamed)'" in request.prompt


def test_handler_report_and_prompt_layout() -> None:
    descriptors = [
        EventDescriptor(
            "Click",
            "btnReport_Click",
            DiscoveryPhase.INTROSPECTION,
            SourceMatch(status=MatchStatus.FOUND, text="void btnReport_Click() { Open(); }"),
        ),
        EventDescriptor("MouseEnter", "Glow", DiscoveryPhase.INTROSPECTION),
    ]
    request = build_request(UiNode(NodeKind.BUTTON, name="btnReport"), descriptors)

    assert request.handler_report == (
        "Click → btnReport_Click\nvoid btnReport_Click() { Open(); }\n\n"
        "MouseEnter → Glow\n(Method Glow exists but no code found; likely updates presentation only)"
    )
    prompt = request.prompt
    assert prompt.startswith("The user clicked on a Button named 'btnReport'.")
    assert '<Button Name="btnReport" />' in prompt
    assert "Event handlers with code:\nClick → btnReport_Click" in prompt
    assert prompt.endswith("Explain in simple terms what this component does and how it behaves.")


def test_builder_is_deterministic() -> None:
    node = UiNode(NodeKind.BUTTON, name="btnEvents", attributes={"Content": "Events"})
    descriptors = [EventDescriptor("Click", "btnEvents_Click", DiscoveryPhase.CONVENTION)]
    assert build_request(node, descriptors) == build_request(node, descriptors)
