"""Tests for control resolution across the visual and logical hierarchies.

Instructions:
- Run via `pytest tests/test_resolver.py`.

Explanation:
- Builds small node trees by hand (buttons with templated content, rich documents
  with text fragments, detached nodes, cycles) and checks which control is found.
"""

from uiexplain.tree.nodes import NodeKind, UiNode
from uiexplain.tree.resolver import resolve_control


def _rich_document(container: UiNode) -> UiNode:
    document = UiNode(NodeKind.DOCUMENT_ROOT, logical_parent=container)
    paragraph = UiNode(NodeKind.TEXT_FRAGMENT, owning_container=document)
    return UiNode(NodeKind.TEXT_FRAGMENT, owning_container=paragraph)


def test_interactive_node_is_fixed_point() -> None:
    for kind in (NodeKind.BUTTON, NodeKind.TEXT_INPUT, NodeKind.CHOICE_LIST, NodeKind.SELECTABLE_LIST, NodeKind.RICH_TEXT_AREA):
        node = UiNode(kind, name="ctl")
        assert resolve_control(node) is node


def test_walks_visual_parents_to_button() -> None:
    window = UiNode(NodeKind.OTHER, name="MainWindow")
    button = UiNode(NodeKind.BUTTON, name="btnReport").place_in(window)
    presenter = UiNode(NodeKind.OTHER).place_in(button)
    label = UiNode(NodeKind.OTHER).place_in(presenter)

    assert resolve_control(label) is button


def test_text_fragment_redirects_through_owning_container() -> None:
    txt_notes = UiNode(NodeKind.TEXT_INPUT, name="txtNotes")
    run = _rich_document(txt_notes)

    resolved = resolve_control(run)

    assert resolved is txt_notes
    assert resolved is not run


def test_text_fragment_ignores_visual_parent() -> None:
    decoy = UiNode(NodeKind.BUTTON, name="btnDecoy")
    area = UiNode(NodeKind.RICH_TEXT_AREA, name="rchDesc")
    run = _rich_document(area)
    run.visual_parent = decoy

    assert resolve_control(run) is area


def test_document_root_with_non_interactive_parent_fails() -> None:
    panel = UiNode(NodeKind.OTHER, name="pnl")
    outer = UiNode(NodeKind.BUTTON, name="btnOuter")
    panel.visual_parent = outer
    document = UiNode(NodeKind.DOCUMENT_ROOT, logical_parent=panel)

    assert resolve_control(document) is None


def test_orphan_fragment_resolves_to_nothing() -> None:
    run = UiNode(NodeKind.TEXT_FRAGMENT)
    assert resolve_control(run) is None


def test_node_without_parents_fails() -> None:
    assert resolve_control(UiNode(NodeKind.OTHER)) is None
    assert resolve_control(None) is None


def test_non_visual_node_uses_logical_parent() -> None:
    combo = UiNode(NodeKind.CHOICE_LIST, name="cmbCategory")
    item = UiNode(NodeKind.OTHER, logical_parent=combo, in_visual_tree=False)
    item.visual_parent = UiNode(NodeKind.BUTTON, name="btnElsewhere")

    assert resolve_control(item) is combo


def test_missing_visual_parent_falls_back_to_logical() -> None:
    listing = UiNode(NodeKind.SELECTABLE_LIST, name="lstReports")
    popup_root = UiNode(NodeKind.OTHER, logical_parent=listing)

    assert resolve_control(popup_root) is listing


def test_cyclic_hierarchy_is_bounded() -> None:
    a = UiNode(NodeKind.OTHER)
    b = UiNode(NodeKind.OTHER, visual_parent=a)
    a.visual_parent = b

    assert resolve_control(a) is None


def test_depth_bound_treated_as_failure() -> None:
    button = UiNode(NodeKind.BUTTON, name="btnDeep")
    node = button
    for _ in range(10):
        node = UiNode(NodeKind.OTHER).place_in(node)

    assert resolve_control(node, max_depth=5) is None
    assert resolve_control(node) is button
