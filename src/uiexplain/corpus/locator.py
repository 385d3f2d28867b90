from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterable, Iterator, Tuple


def _split_env_list(raw: str | None, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not raw:
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class CorpusConfig:
    marker_globs: Tuple[str, ...] = ("*.csproj",)
    suffixes: Tuple[str, ...] = (".cs",)
    excluded_dirs: Tuple[str, ...] = ("bin", "obj")

    @classmethod
    def from_env(cls) -> "CorpusConfig":
        base = cls()
        return cls(
            marker_globs=_split_env_list(os.getenv("UIEXPLAIN_CORPUS_MARKERS"), base.marker_globs),
            suffixes=_split_env_list(os.getenv("UIEXPLAIN_CORPUS_SUFFIXES"), base.suffixes),
            excluded_dirs=base.excluded_dirs,
        )


def _has_marker(directory: Path, marker_globs: Iterable[str]) -> bool:
    for pattern in marker_globs:
        try:
            if any(p.is_file() for p in directory.glob(pattern)):
                return True
        except OSError:
            continue
    return False


def find_corpus_root(start_dir: Path, marker_globs: Iterable[str] = ("*.csproj",)) -> Path | None:
    """Walk upward from ``start_dir`` until a directory holding a marker file is found."""
    markers = tuple(marker_globs)
    try:
        current = start_dir.resolve()
    except OSError:
        return None
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        if _has_marker(directory, markers):
            return directory
    return None


def iter_source_files(
    root: Path,
    *,
    suffixes: Iterable[str] = (".cs",),
    excluded_dirs: Iterable[str] = ("bin", "obj"),
) -> Iterator[Path]:
    """Yield candidate files under ``root`` in a stable order, skipping build output."""
    wanted = {s.lower() for s in suffixes}
    excluded = set(excluded_dirs)
    for path in sorted(root.rglob("*")):
        if path.suffix.lower() not in wanted:
            continue
        rel_parts = path.relative_to(root).parts[:-1]
        if excluded.intersection(rel_parts):
            continue
        if not path.is_file():
            continue
        yield path


