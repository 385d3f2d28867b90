from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

"""Command-line interface for UiExplain."""

import argparse
import asyncio
from dataclasses import replace
from pathlib import Path
from typing import List

from uiexplain.corpus.extractor import MatchStatus
from uiexplain.corpus.locator import CorpusConfig
from uiexplain.corpus.source import SourceCorpus
from uiexplain.events.discovery import HandlerRegistry
from uiexplain.pipeline import ComponentExplainer, display_text
from uiexplain.reasoning.explainer import ExplainerConfig, ExplanationClient, ExplanationResult, ResultKind
from uiexplain.tree.nodes import NodeKind, UiNode


def _add_corpus_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=Path, default=Path.cwd(), help="Directory to search upward from (default: cwd)")
    parser.add_argument("--marker", action="append", default=None, help="Marker glob identifying the corpus root (repeatable)")
    parser.add_argument("--suffix", action="append", default=None, help="Source file suffix to scan (repeatable)")


def _build_corpus(args: argparse.Namespace) -> SourceCorpus:
    base = CorpusConfig.from_env()
    config = CorpusConfig(
        marker_globs=tuple(args.marker) if args.marker else base.marker_globs,
        suffixes=tuple(args.suffix) if args.suffix else base.suffixes,
        excluded_dirs=base.excluded_dirs,
    )
    return SourceCorpus.locate(args.start, config)


def _parse_bindings(node: UiNode, specs: List[str] | None) -> HandlerRegistry:
    registry = HandlerRegistry()
    for spec in specs or []:
        event_name, sep, handler = spec.partition("=")
        if not sep or not event_name.strip() or not handler.strip():
            raise ValueError(f"--handler expects EVENT=NAME, got {spec!r}")
        registry.bind(node, event_name.strip(), handler.strip())
    return registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UiExplain component explanation tools")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Print the source of a method found in the corpus")
    extract.add_argument("method", help="Method name to look up (e.g., btnReport_Click)")
    _add_corpus_flags(extract)

    explain = sub.add_parser("explain", help="Explain a control described on the command line")
    explain.add_argument("--kind", required=True, help="Control kind (Button, TextInput, ChoiceList, ...)")
    explain.add_argument("--name", default="", help="Control name")
    explain.add_argument("--content", default=None, help="Displayed content/text")
    explain.add_argument("--tooltip", default=None, help="Tooltip text")
    explain.add_argument("--tag", default=None, help="Custom tag value")
    explain.add_argument("--handler", action="append", default=None, help="Bound handler as EVENT=NAME (repeatable)")
    explain.add_argument("--model", default=None, help="Model id (default: UIEXPLAIN_MODEL or built-in)")
    explain.add_argument("--prompt-out", type=Path, default=None, help="Write the built prompt to this path")
    explain.add_argument("--no-llm", action="store_true", help="Disable LLM usage")
    _add_corpus_flags(explain)

    return parser


def _node_from_args(args: argparse.Namespace) -> UiNode:
    attributes = {}
    if args.content is not None:
        attributes["Content"] = args.content
    if args.tooltip is not None:
        attributes["ToolTip"] = args.tooltip
    if args.tag is not None:
        attributes["Tag"] = args.tag
    return UiNode(kind=NodeKind.parse(args.kind), name=args.name, attributes=attributes)


async def _run_explain(explainer: ComponentExplainer, node: UiNode) -> ExplanationResult:
    try:
        return await explainer.explain(node)
    finally:
        if explainer.client is not None:
            await explainer.client.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    corpus = _build_corpus(args)
    if corpus.root is None:
        print(f"UiExplain: no corpus marker found above {args.start}; source lookups will miss.")
    else:
        print(f"UiExplain: corpus root {corpus.root}.")

    if args.command == "extract":
        match = corpus.extract(args.method)
        if match.status is MatchStatus.NOT_FOUND:
            print(f"(Method {args.method} not found)")
            return 1
        print(f"// {match.path}:{match.lineno}")
        print(match.text)
        if match.status is MatchStatus.FOUND_EMPTY:
            print(f"(Method {args.method} found but body appears empty)")
        return 0

    if args.command == "explain":
        try:
            node = _node_from_args(args)
            registry = _parse_bindings(node, args.handler)
        except ValueError as exc:
            parser.error(str(exc))

        client = None
        if not args.no_llm:
            try:
                config = ExplainerConfig.from_env()
                if args.model:
                    config = replace(config, model=args.model)
                client = ExplanationClient(config)
                print(f"UiExplain: LLM enabled ({config.model}).")
            except Exception as exc:
                print(f"UiExplain: LLM unavailable ({type(exc).__name__}: {exc}); using deterministic summary.")

        explainer = ComponentExplainer(corpus, registry, client)

        if args.prompt_out is not None:
            inspection = explainer.inspect(node)
            if inspection is not None:
                args.prompt_out.parent.mkdir(parents=True, exist_ok=True)
                args.prompt_out.write_text(inspection.request.prompt, encoding="utf-8")

        result = asyncio.run(_run_explain(explainer, node))
        print(display_text(result))
        return 1 if result.kind in (ResultKind.ERROR, ResultKind.NO_CONTROL) else 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
