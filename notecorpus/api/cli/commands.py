"""Subcommands of the notecorpus CLI."""

import argparse
import json
import logging
import sys
from typing import IO, List, Optional

from notecorpus.shared.config import IndexerConfig, load_config
from notecorpus.shared.exceptions import NotFoundError
from notecorpus.storage import LangChainAdapter, export_json

from ..formatters import ResponseFormatter
from ..use_cases import NoteIndex
from ..validators import RequestValidator, ValidationError


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def open_index(args: argparse.Namespace, config: IndexerConfig) -> Optional[NoteIndex]:
    index = NoteIndex(args.inputs, config)
    if not index.builder.expand_inputs(args.inputs):
        print("[warn] no input files")
        return None
    result = index.refresh()
    for error in result.errors:
        print(f"[warn] skipped {error.path}: {error.reason}")
    return index


def cmd_index(args: argparse.Namespace, config: IndexerConfig) -> int:
    index = NoteIndex(args.inputs, config)
    if not index.builder.expand_inputs(args.inputs):
        print("[warn] no input files")
        return 2
    result = index.refresh()
    print(ResponseFormatter.format_build_report(result))
    return 0 if result.ok else 1


def cmd_search(args: argparse.Namespace, config: IndexerConfig) -> int:
    query = RequestValidator.validate_query(args.query)
    index = open_index(args, config)
    if index is None:
        return 2
    fields = (args.field,) if args.field else ("heading", "body")
    results = index.query.search(query, fields=fields)
    if args.json:
        print(ResponseFormatter.format_segments_json(results))
    else:
        print(ResponseFormatter.format_segments_text(results))
    return 0


def cmd_tag(args: argparse.Namespace, config: IndexerConfig) -> int:
    tag = RequestValidator.validate_tag(args.tag)
    index = open_index(args, config)
    if index is None:
        return 2
    results = index.query.by_tag(tag)
    if args.json:
        print(ResponseFormatter.format_segments_json(results))
    else:
        print(ResponseFormatter.format_segments_text(results))
    return 0


def cmd_get(args: argparse.Namespace, config: IndexerConfig) -> int:
    segment_id = RequestValidator.validate_segment_id(args.segment_id)
    index = open_index(args, config)
    if index is None:
        return 2
    try:
        segment = index.store.get(segment_id)
    except NotFoundError as exc:
        print(ResponseFormatter.format_error(exc))
        return 1
    print(ResponseFormatter.format_segment_detail(segment))
    return 0


def cmd_dupes(args: argparse.Namespace, config: IndexerConfig) -> int:
    raw = args.threshold if args.threshold is not None else config.duplicate_threshold
    threshold = RequestValidator.validate_threshold(raw)
    index = open_index(args, config)
    if index is None:
        return 2
    pairs = index.query.find_duplicates(threshold)
    if args.json:
        print(ResponseFormatter.format_duplicates_json(pairs))
    else:
        print(ResponseFormatter.format_duplicates_text(pairs))
    return 0


def write_export(index: NoteIndex, fmt: str, handle: IO[str]) -> int:
    segments = index.store.all()
    if fmt == "documents":
        count = 0
        for doc in LangChainAdapter.to_documents(segments):
            row = {"id": doc.id, "page_content": doc.page_content, "metadata": doc.metadata}
            handle.write(json.dumps(row, ensure_ascii=False) + "\n")
            count += 1
        return count
    return export_json(segments, handle)


def cmd_export(args: argparse.Namespace, config: IndexerConfig) -> int:
    index = open_index(args, config)
    if index is None:
        return 2
    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            count = write_export(index, args.format, handle)
        print(f"[ok] wrote {count} segment(s) to {args.output}", file=sys.stderr)
    else:
        write_export(index, args.format, sys.stdout)
    return 0


def cmd_watch(args: argparse.Namespace, config: IndexerConfig) -> int:
    index = NoteIndex(args.inputs, config)
    if not index.builder.expand_inputs(args.inputs):
        print("[warn] no input files")
        return 2
    print(ResponseFormatter.format_build_report(index.refresh()))

    def on_change() -> None:
        print(ResponseFormatter.format_build_report(index.refresh()))

    watcher = index.create_watcher(on_change=on_change)
    watcher.start()
    print("[watch] waiting for changes, Ctrl-C to stop")
    try:
        while not watcher.join(0.5):
            pass
    except KeyboardInterrupt:
        print()
    finally:
        watcher.stop()
    return 0


def cmd_repl(args: argparse.Namespace, config: IndexerConfig) -> int:
    from .repl import run_repl

    return run_repl(args, config)


def _add_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("inputs", nargs="+", help="Files, directories or globs (e.g., notes/*.swift)")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Index heading-delimited note files and query them")
    parser.add_argument("--log-level", help="Override NOTES_LOG_LEVEL (DEBUG/INFO/WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("index", help="Parse inputs and report segment counts")
    _add_inputs(p)
    p.set_defaults(handler=cmd_index)

    p = sub.add_parser("search", help="Case-insensitive substring search")
    p.add_argument("query")
    _add_inputs(p)
    p.add_argument("--field", choices=["heading", "body"], help="Restrict matching to one field")
    p.add_argument("--json", action="store_true", help="Output JSON")
    p.set_defaults(handler=cmd_search)

    p = sub.add_parser("tag", help="List segments carrying a tag")
    p.add_argument("tag")
    _add_inputs(p)
    p.add_argument("--json", action="store_true", help="Output JSON")
    p.set_defaults(handler=cmd_tag)

    p = sub.add_parser("get", help="Show one segment by id")
    p.add_argument("segment_id")
    _add_inputs(p)
    p.set_defaults(handler=cmd_get)

    p = sub.add_parser("dupes", help="Report near-duplicate segments")
    _add_inputs(p)
    p.add_argument("--threshold", type=float, help="Minimum similarity (default NOTES_DUPLICATE_THRESHOLD)")
    p.add_argument("--json", action="store_true", help="Output JSON")
    p.set_defaults(handler=cmd_dupes)

    p = sub.add_parser("export", help="Export segments as JSON")
    _add_inputs(p)
    p.add_argument("-o", "--output", help="Output file (default stdout)")
    p.add_argument(
        "--format",
        choices=["json", "documents"],
        default="json",
        help="json array, or LangChain documents as JSON lines",
    )
    p.set_defaults(handler=cmd_export)

    p = sub.add_parser("watch", help="Re-index whenever inputs change")
    _add_inputs(p)
    p.set_defaults(handler=cmd_watch)

    p = sub.add_parser("repl", help="Interactive query shell")
    _add_inputs(p)
    p.add_argument("--watch", action="store_true", help="Re-index in the background on change")
    p.set_defaults(handler=cmd_repl)

    return parser


def run(args: argparse.Namespace, config: Optional[IndexerConfig] = None) -> int:
    config = config or load_config()
    configure_logging(args.log_level or config.log_level)
    try:
        return args.handler(args, config)
    except ValidationError as exc:
        print(ResponseFormatter.format_error(exc))
        return 2


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    return run(parser.parse_args(argv))


__all__ = ["create_parser", "run", "main"]
