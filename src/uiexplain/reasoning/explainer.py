from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json
import os
from typing import Dict, List, Optional, Sequence

import httpx
from langsmith import traceable
from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI, RateLimitError

from uiexplain.corpus.extractor import MatchStatus
from uiexplain.events.discovery import DiscoveryPhase, EventDescriptor
from uiexplain.reasoning.prompt import NO_VISUAL_HINTS, ExplanationRequest

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly guide inside a municipal services app. "
    "Explain app features at a high level in plain, everyday terms. "
    "Keep responses short, casual and helpful, like you are talking to a neighbour. "
    "Avoid overexplaining and do not use formatting like bold text, quotation marks or lists. "
    "Just give natural plain text responses."
)

BUSY_TEXT = "System is busy, try again later."
NO_CONTROL_TEXT = "I couldn't identify what you clicked."


@dataclass(frozen=True)
class ExplainerConfig:
    api_key: str | None = None
    base_url: str = "https://openrouter.ai/api/v1/"
    model: str = "moonshotai/kimi-k2:free"
    timeout_s: float = 60.0
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    @classmethod
    def from_env(cls) -> "ExplainerConfig":
        base = cls()
        return cls(
            api_key=os.getenv("OPENROUTER_API_KEY") or None,
            base_url=os.getenv("UIEXPLAIN_BASE_URL", base.base_url),
            model=os.getenv("UIEXPLAIN_MODEL", base.model),
            timeout_s=float(os.getenv("UIEXPLAIN_TIMEOUT", str(base.timeout_s))),
        )


class ResultKind(str, Enum):
    ANSWER = "answer"
    BUSY = "busy"
    ERROR = "error"
    NO_CONTROL = "no_control"


@dataclass(frozen=True)
class ExplanationResult:
    kind: ResultKind
    text: str
    # Raw response body, kept for diagnostics on ERROR results.
    raw: str | None = None

    @classmethod
    def answer(cls, text: str) -> "ExplanationResult":
        return cls(kind=ResultKind.ANSWER, text=text)

    @classmethod
    def busy(cls) -> "ExplanationResult":
        return cls(kind=ResultKind.BUSY, text=BUSY_TEXT)

    @classmethod
    def error(cls, text: str, *, raw: str | None = None) -> "ExplanationResult":
        return cls(kind=ResultKind.ERROR, text=text, raw=raw)

    @classmethod
    def no_control(cls) -> "ExplanationResult":
        return cls(kind=ResultKind.NO_CONTROL, text=NO_CONTROL_TEXT)

    @property
    def is_retryable(self) -> bool:
        return self.kind in (ResultKind.BUSY, ResultKind.ERROR)


def parse_reply(body: str) -> ExplanationResult:
    """Pull ``choices[0].message.content`` out of a chat-completions body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return ExplanationResult.error(f"Error: Unreadable response. Raw: {body}", raw=body)

    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not isinstance(choices, list) or not choices:
        return ExplanationResult.error(f"Error: No choices returned. Raw: {body}", raw=body)

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict) or "content" not in message:
        return ExplanationResult.error(f"Error: No content returned. Raw: {body}", raw=body)

    content = message["content"]
    # An explicit null is an empty answer; the caller renders it as "(No response)".
    if content is None:
        return ExplanationResult.answer("")
    if not isinstance(content, str):
        return ExplanationResult.error(f"Error: No content returned. Raw: {body}", raw=body)

    return ExplanationResult.answer(content)


def _describe(exc: BaseException) -> str:
    cause = exc.__cause__
    if cause is not None and str(cause):
        return f"{exc} ({type(cause).__name__}: {cause})"
    return str(exc) or type(exc).__name__


@traceable(name="explain_component", run_type="llm")
async def _post_chat(client: AsyncOpenAI, model: str, messages: List[Dict[str, str]]) -> str:
    raw = await client.chat.completions.with_raw_response.create(model=model, messages=messages)
    return raw.http_response.text


class ExplanationClient:
    """One chat-completions round trip per request; retrying is left to the caller."""

    def __init__(self, config: ExplainerConfig, *, http_client: httpx.AsyncClient | None = None):
        if not config.api_key:
            raise RuntimeError("API key not found. Set OPENROUTER_API_KEY in the environment.")
        self.config = config
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_retries=0,
            http_client=http_client,
        )

    def messages_for(self, request: ExplanationRequest) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.config.system_prompt},
            {"role": "user", "content": request.prompt},
        ]

    async def explain(self, request: ExplanationRequest) -> ExplanationResult:
        try:
            body = await _post_chat(self._client, self.config.model, self.messages_for(request))
        except RateLimitError:
            print("[UiExplain][LLM] rate limited by the service.")
            return ExplanationResult.busy()
        except APIStatusError as exc:
            text = exc.response.text
            print(f"[UiExplain][LLM] HTTP {exc.status_code} from the service.")
            return ExplanationResult.error(f"Error: HTTP {exc.status_code}: {text}", raw=text)
        except APIConnectionError as exc:
            print(f"[UiExplain][LLM] transport failure: {exc!r}")
            return ExplanationResult.error(f"Error: {_describe(exc)}")
        except APIError as exc:
            return ExplanationResult.error(f"Error: {_describe(exc)}")

        return parse_reply(body)

    async def aclose(self) -> None:
        await self._client.close()


# ---------- offline rendering (no remote service) ----------


def _describe_source(descriptor: EventDescriptor) -> str:
    match = descriptor.source
    if match.status is MatchStatus.FOUND:
        where = f" in {match.path.name}:{match.lineno}" if match.path is not None else ""
        return f"its code was found{where}"
    if match.status is MatchStatus.FOUND_EMPTY:
        return "its method exists but is empty"
    if descriptor.phase is DiscoveryPhase.INTROSPECTION:
        return "it is bound but its code could not be located"
    return "no matching code was found, so it may do nothing yet"


def deterministic_summary(
    request: ExplanationRequest,
    descriptors: Optional[Sequence[EventDescriptor]] = None,
) -> str:
    """Plain description assembled from the request alone, used when no LLM is available."""
    lines: List[str] = [f"This is a {request.control_kind} named '{request.control_name}'."]
    if request.visual_hints != NO_VISUAL_HINTS:
        lines.append(f"It shows {request.visual_hints}.")

    if descriptors:
        for d in descriptors:
            lines.append(f"- When {d.event_name} happens it runs {d.handler_name}; {_describe_source(d)}.")
    else:
        lines.append("No event handlers were detected, so it does not perform any actions by itself.")

    return "\n".join(lines)
