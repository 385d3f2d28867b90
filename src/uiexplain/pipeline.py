from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from uiexplain.corpus.source import SourceCorpus
from uiexplain.events.discovery import EventDescriptor, HandlerRegistry, discover_events
from uiexplain.reasoning.explainer import ExplanationClient, ExplanationResult, deterministic_summary
from uiexplain.reasoning.prompt import ExplanationRequest, build_request
from uiexplain.tree.nodes import TreeNode, UiNode
from uiexplain.tree.resolver import resolve_control

NO_RESPONSE_TEXT = "(No response)"


@dataclass(frozen=True)
class Inspection:
    control: UiNode
    descriptors: List[EventDescriptor]
    request: ExplanationRequest


class ComponentExplainer:
    """Gesture -> control -> handlers -> prompt -> remote explanation.

    Holds only collaborators, never per-call state, so overlapping calls are safe
    as far as the core is concerned. Gating repeat clicks is the caller's job.
    """

    def __init__(
        self,
        corpus: SourceCorpus,
        registry: HandlerRegistry | None = None,
        client: ExplanationClient | None = None,
    ):
        self.corpus = corpus
        self.registry = registry or HandlerRegistry()
        self.client = client

    def inspect(self, origin: Optional[TreeNode]) -> Inspection | None:
        control = resolve_control(origin)
        if control is None:
            return None

        descriptors = discover_events(control, self.registry, self.corpus.extract)
        return Inspection(
            control=control,
            descriptors=descriptors,
            request=build_request(control, descriptors),
        )

    async def explain(self, origin: Optional[TreeNode]) -> ExplanationResult:
        inspection = self.inspect(origin)
        if inspection is None:
            print("UiExplain: no interactive control under the gesture.")
            return ExplanationResult.no_control()

        print(
            f"UiExplain: resolved {inspection.control.kind.value} '{inspection.control.display_name}' "
            f"with {len(inspection.descriptors)} handler(s)."
        )

        if self.client is None:
            return ExplanationResult.answer(deterministic_summary(inspection.request, inspection.descriptors))

        return await self.client.explain(inspection.request)


def display_text(result: ExplanationResult) -> str:
    """Text a caller should show for ``result``; blank answers become a sentinel."""
    if not result.text or not result.text.strip():
        return NO_RESPONSE_TEXT
    return result.text
