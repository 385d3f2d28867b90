from __future__ import annotations

"""Find which behaviors a control exposes and which handler code is bound to them.

Two phases:
- introspection: ask the HandlerRegistry (filled by the presentation layer) for
  each event the node's kind exposes, then any other event bound on the node;
  a failing lookup only skips that event
- convention: for kinds with a default event, guess ``{name}_{event}`` unless
  introspection already reported that event

Every descriptor carries the extracted handler source or a fallback message.
"""

from dataclasses import dataclass
from enum import Enum
import functools
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from uiexplain.corpus.extractor import MatchStatus, SourceMatch
from uiexplain.tree.nodes import UiNode

SourceLookup = Callable[[str], SourceMatch]


class DiscoveryPhase(str, Enum):
    INTROSPECTION = "introspection"
    CONVENTION = "convention"


@dataclass(frozen=True)
class EventDescriptor:
    event_name: str
    handler_name: str
    phase: DiscoveryPhase
    source: SourceMatch = SourceMatch.not_found()

    @property
    def source_text(self) -> str:
        if self.source.status is MatchStatus.FOUND and self.source.text:
            return self.source.text
        if self.source.status is MatchStatus.FOUND_EMPTY:
            return f"(Method {self.handler_name} found but body appears empty — no behavior implemented)"
        if self.phase is DiscoveryPhase.INTROSPECTION:
            return f"(Method {self.handler_name} exists but no code found; likely updates presentation only)"
        return (
            f"(Method {self.handler_name} declared but no matching source found; "
            "default action could be showing a message or updating a control)"
        )

    def render(self) -> str:
        return f"{self.event_name} → {self.handler_name}\n{self.source_text}"


def handler_identifier(handler: object) -> str:
    """Name of a bound handler reference: a string, or a function/method/partial."""
    if isinstance(handler, str):
        if not handler:
            raise ValueError("empty handler name")
        return handler
    while isinstance(handler, functools.partial):
        handler = handler.func
    handler = getattr(handler, "__func__", handler)
    name = getattr(handler, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        raise TypeError(f"cannot name handler {handler!r}")
    return name


class HandlerRegistry:
    """Handlers bound per control instance and event, kept in attachment order."""

    def __init__(self) -> None:
        # UiNode compares by identity, so distinct unnamed controls never share bindings.
        self._bindings: Dict[UiNode, Dict[str, List[object]]] = {}

    def bind(self, node: UiNode, event_name: str, handler: object) -> None:
        self._bindings.setdefault(node, {}).setdefault(event_name, []).append(handler)

    def handlers_for(self, node: UiNode, event_name: str) -> List[object]:
        return list(self._bindings.get(node, {}).get(event_name, ()))

    def bound_events(self, node: UiNode) -> List[str]:
        """Events with at least one binding on ``node``, in first-registration order."""
        return list(self._bindings.get(node, {}))

    def __len__(self) -> int:
        return sum(len(handlers) for events in self._bindings.values() for handlers in events.values())


def _candidate_events(node: UiNode, registry: HandlerRegistry) -> List[str]:
    events = list(node.kind.events)
    try:
        extra = registry.bound_events(node)
    except Exception:
        extra = []
    events.extend(ev for ev in extra if ev not in events)
    return events


def _introspect(node: UiNode, registry: HandlerRegistry) -> List[Tuple[str, str]]:
    found: List[Tuple[str, str]] = []
    for event_name in _candidate_events(node, registry):
        try:
            names: List[str] = []
            for handler in registry.handlers_for(node, event_name):
                name = handler_identifier(handler)
                if name not in names:
                    names.append(name)
        except Exception:
            # One unreadable binding must not hide the remaining events.
            continue
        found.extend((event_name, name) for name in names)
    return found


def discover_events(
    node: UiNode,
    registry: Optional[HandlerRegistry] = None,
    lookup: Optional[SourceLookup] = None,
) -> List[EventDescriptor]:
    """Return descriptors for ``node``: introspected bindings first, then the convention guess.

    ``lookup`` maps a handler name to a SourceMatch (normally SourceCorpus.extract);
    without one every handler reports its not-found message.
    """
    pairs: List[Tuple[str, str, DiscoveryPhase]] = []
    if registry is not None:
        pairs.extend((ev, h, DiscoveryPhase.INTROSPECTION) for ev, h in _introspect(node, registry))

    default_event = node.kind.default_event
    if default_event and node.name and not any(ev == default_event for ev, _, _ in pairs):
        pairs.append((default_event, f"{node.name}_{default_event}", DiscoveryPhase.CONVENTION))

    return [
        EventDescriptor(event_name=ev, handler_name=h, phase=phase, source=_lookup_source(lookup, h))
        for ev, h, phase in pairs
    ]


def _lookup_source(lookup: Optional[SourceLookup], handler_name: str) -> SourceMatch:
    if lookup is None:
        return SourceMatch.not_found()
    try:
        return lookup(handler_name)
    except Exception:
        return SourceMatch.not_found()


def render_handler_report(descriptors: Sequence[EventDescriptor]) -> List[str]:
    return [d.render() for d in descriptors]
