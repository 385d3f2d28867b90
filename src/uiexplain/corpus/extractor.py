from __future__ import annotations

"""Recover a method's declaration text from brace-delimited source files.

This is plain text scanning, not parsing:
- prefilter each file on the literal ``name(``
- for each occurrence, walk back to the previous statement boundary, match the
  parameter parentheses, then match the body braces
- an occurrence whose delimiters never balance is skipped, never returned

Only the first well-formed occurrence (file order, then position) is reported.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import re
from typing import Iterable, Optional, Tuple

from uiexplain.corpus.locator import iter_source_files

_BOUNDARY_CHARS = "\n;{}"
_BLANK_LINE_RUN = re.compile(r"\n[ \t]*\n\s*\n")
_COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)


class MatchStatus(str, Enum):
    FOUND = "found"
    FOUND_EMPTY = "found_empty"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SourceMatch:
    status: MatchStatus
    text: str | None = None
    path: Path | None = None
    lineno: int | None = None

    @classmethod
    def not_found(cls) -> "SourceMatch":
        return cls(status=MatchStatus.NOT_FOUND)

    @property
    def is_match(self) -> bool:
        return self.status is not MatchStatus.NOT_FOUND


def strip_comments(code: str) -> str:
    return _COMMENT_RE.sub("", code)


def _match_forward(code: str, open_idx: int, open_ch: str, close_ch: str) -> int | None:
    """Return the index just past the delimiter closing ``code[open_idx]``, or None."""
    depth = 0
    for pos in range(open_idx, len(code)):
        ch = code[pos]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return pos + 1
    return None


def _declaration_start(code: str, idx: int) -> int:
    pos = idx - 1
    while pos >= 0 and code[pos] not in _BOUNDARY_CHARS:
        pos -= 1
    return pos + 1


def _match_occurrence(code: str, idx: int, name_len: int) -> Optional[Tuple[int, int, int]]:
    """Return (start, brace_open, body_end) for a well-formed occurrence, else None."""
    paren_open = idx + name_len
    params_end = _match_forward(code, paren_open, "(", ")")
    if params_end is None:
        return None

    brace_open = code.find("{", params_end)
    if brace_open < 0:
        return None
    # A statement terminator before the brace means this was a call or an
    # expression-bodied member, not a block declaration.
    if ";" in code[params_end:brace_open]:
        return None

    body_end = _match_forward(code, brace_open, "{", "}")
    if body_end is None:
        return None

    return _declaration_start(code, idx), brace_open, body_end


def _tidy(text: str) -> str:
    return _BLANK_LINE_RUN.sub("\n\n", text.strip())


def extract_from_text(code: str, method_name: str) -> SourceMatch:
    """Scan one file's text; ``path`` is left for the caller to fill in."""
    needle = method_name + "("
    if not method_name or needle not in code:
        return SourceMatch.not_found()

    idx = code.find(needle)
    while idx >= 0:
        # Skip hits that are the tail of a longer identifier (e.g. "xFoo(" for "Foo").
        if idx > 0 and (code[idx - 1].isalnum() or code[idx - 1] == "_"):
            idx = code.find(needle, idx + 1)
            continue

        span = _match_occurrence(code, idx, len(method_name))
        if span is None:
            idx = code.find(needle, idx + 1)
            continue

        start, brace_open, body_end = span
        text = _tidy(code[start:body_end])
        interior = code[brace_open + 1 : body_end - 1]
        lineno = code.count("\n", 0, start) + 1
        if strip_comments(interior).strip():
            return SourceMatch(status=MatchStatus.FOUND, text=text, lineno=lineno)
        return SourceMatch(status=MatchStatus.FOUND_EMPTY, text=text, lineno=lineno)

    return SourceMatch.not_found()


def extract_method(
    corpus_root: Path | None,
    method_name: str,
    *,
    files: Iterable[Path] | None = None,
) -> SourceMatch:
    """Search corpus files for ``method_name`` and return the first well-formed match.

    ``files`` overrides enumeration (SourceCorpus passes its configured listing);
    by default every ``*.cs`` file under ``corpus_root`` outside bin/obj is scanned.
    Unreadable files are skipped; nothing here raises to the caller.
    """
    if corpus_root is None or not method_name:
        return SourceMatch.not_found()

    if files is None:
        try:
            files = list(iter_source_files(corpus_root))
        except OSError:
            return SourceMatch.not_found()

    for path in files:
        try:
            code = path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue

        match = extract_from_text(code, method_name)
        if match.is_match:
            return SourceMatch(status=match.status, text=match.text, path=path, lineno=match.lineno)

    return SourceMatch.not_found()
