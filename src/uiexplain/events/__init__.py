"""Event and handler discovery for resolved controls.

Instructions:
- Populate a HandlerRegistry from the presentation layer, then call discover_events
  with the resolved node and a SourceCorpus.

Explanation:
- Re-exports the descriptor types and the discovery entry point.
"""

from .discovery import DiscoveryPhase, EventDescriptor, HandlerRegistry, discover_events, handler_identifier

__all__ = [
    "DiscoveryPhase",
    "EventDescriptor",
    "HandlerRegistry",
    "discover_events",
    "handler_identifier",
]
