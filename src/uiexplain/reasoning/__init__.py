"""Prompt building and remote explanation for resolved controls."""

from .explainer import (
    ExplainerConfig,
    ExplanationClient,
    ExplanationResult,
    ResultKind,
    deterministic_summary,
    parse_reply,
)
from .prompt import ExplanationRequest, build_request

__all__ = [
    "ExplainerConfig",
    "ExplanationClient",
    "ExplanationRequest",
    "ExplanationResult",
    "ResultKind",
    "build_request",
    "deterministic_summary",
    "parse_reply",
]
