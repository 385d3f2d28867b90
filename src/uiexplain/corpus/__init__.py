"""Source corpus access.

Instructions:
- Use SourceCorpus.locate to find the source tree above a runtime directory, then
  SourceCorpus.extract to pull a method's declaration text out of it.

Explanation:
- Re-exports the locator and the brace-matching method extractor.
"""

from .extractor import MatchStatus, SourceMatch, extract_from_text, extract_method, strip_comments
from .locator import CorpusConfig, find_corpus_root, iter_source_files
from .source import SourceCorpus

__all__ = [
    "CorpusConfig",
    "MatchStatus",
    "SourceCorpus",
    "SourceMatch",
    "extract_from_text",
    "extract_method",
    "find_corpus_root",
    "iter_source_files",
    "strip_comments",
]
