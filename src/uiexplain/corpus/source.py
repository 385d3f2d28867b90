from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from uiexplain.corpus.extractor import SourceMatch, extract_method
from uiexplain.corpus.locator import CorpusConfig, find_corpus_root, iter_source_files


@dataclass(frozen=True)
class SourceCorpus:
    """A located source tree; ``root`` is None when no marker was found above the start dir."""

    root: Path | None
    config: CorpusConfig = field(default_factory=CorpusConfig)

    @classmethod
    def locate(cls, start_dir: Path, config: CorpusConfig | None = None) -> "SourceCorpus":
        config = config or CorpusConfig()
        return cls(root=find_corpus_root(start_dir, config.marker_globs), config=config)

    def files(self) -> Iterator[Path]:
        if self.root is None:
            return iter(())
        return iter_source_files(
            self.root,
            suffixes=self.config.suffixes,
            excluded_dirs=self.config.excluded_dirs,
        )

    def extract(self, method_name: str) -> SourceMatch:
        if self.root is None:
            return SourceMatch.not_found()
        try:
            files = list(self.files())
        except OSError:
            return SourceMatch.not_found()
        return extract_method(self.root, method_name, files=files)
