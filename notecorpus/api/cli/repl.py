"""Interactive shell for querying an indexed note corpus.

Usage:
    python -m notecorpus.api.cli repl notes/
"""

import argparse

from notecorpus.shared.config import IndexerConfig
from notecorpus.shared.exceptions import NotFoundError

from ..formatters import ResponseFormatter
from ..use_cases import NoteIndex
from ..validators import RequestValidator, ValidationError


def print_help() -> None:
    print(
        "\nCommands:\n"
        "  :help                 Show this help\n"
        "  :quit / :q / exit     Quit\n"
        "  :show                 Show current settings\n"
        "  :field <name|all>     Match heading, body or both\n"
        "  :json <on|off>        Toggle JSON output\n"
        "  :tag <tag>            List segments carrying a tag\n"
        "  :get <id>             Show one segment\n"
        "  :dupes [threshold]    Report near-duplicate segments\n"
        "  :reload               Re-index now\n"
        "\nEnter any other text to run a substring search.\n"
    )


def parse_toggle(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "y", "on")


def show_settings(index: NoteIndex, field, as_json, watching) -> None:
    corpus = index.store.snapshot()
    print("Current settings:")
    print(f"  field:       {field or 'heading+body'}")
    print(f"  json:        {'on' if as_json else 'off'}")
    print(f"  watch:       {'on' if watching else 'off'}")
    print(f"  generation:  {corpus.generation}")
    print(f"  segments:    {len(corpus)}")


def run_repl(args: argparse.Namespace, config: IndexerConfig) -> int:
    index = NoteIndex(args.inputs, config)
    print(ResponseFormatter.format_build_report(index.refresh()))

    watcher = None
    if getattr(args, "watch", False):
        watcher = index.create_watcher()
        watcher.start()

    field = None
    as_json = False

    print("Note corpus REPL")
    print("Type :help for commands.")

    try:
        while True:
            try:
                line = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not line:
                continue

            cmd = line.split()
            head = cmd[0].lower()

            if head in (":quit", ":q", "exit"):
                break
            if head == ":help":
                print_help()
                continue
            if head == ":show":
                show_settings(index, field, as_json, watcher is not None)
                continue
            if head == ":field":
                if len(cmd) < 2 or cmd[1].lower() not in ("heading", "body", "all"):
                    print("[error] usage: :field <heading|body|all>")
                    continue
                field = None if cmd[1].lower() == "all" else cmd[1].lower()
                print(f"[ok] field set to {field or 'heading+body'}")
                continue
            if head == ":json":
                if len(cmd) < 2:
                    print("[error] usage: :json <on|off>")
                    continue
                as_json = parse_toggle(cmd[1])
                print(f"[ok] json {'on' if as_json else 'off'}")
                continue
            if head == ":reload":
                print(ResponseFormatter.format_build_report(index.refresh()))
                continue

            try:
                if head == ":tag":
                    tag = RequestValidator.validate_tag(cmd[1] if len(cmd) > 1 else None)
                    results = index.query.by_tag(tag)
                elif head == ":get":
                    segment_id = RequestValidator.validate_segment_id(cmd[1] if len(cmd) > 1 else None)
                    print(ResponseFormatter.format_segment_detail(index.store.get(segment_id)))
                    continue
                elif head == ":dupes":
                    raw = cmd[1] if len(cmd) > 1 else config.duplicate_threshold
                    pairs = index.query.find_duplicates(RequestValidator.validate_threshold(raw))
                    if as_json:
                        print(ResponseFormatter.format_duplicates_json(pairs))
                    else:
                        print(ResponseFormatter.format_duplicates_text(pairs))
                    continue
                elif head.startswith(":"):
                    print(f"[error] unknown command {head}; type :help")
                    continue
                else:
                    query = RequestValidator.validate_query(line)
                    fields = (field,) if field else ("heading", "body")
                    results = index.query.search(query, fields=fields)
            except (ValidationError, NotFoundError) as exc:
                print(ResponseFormatter.format_error(exc))
                continue

            if as_json:
                print(ResponseFormatter.format_segments_json(results))
            else:
                print(ResponseFormatter.format_segments_text(results))
    finally:
        if watcher is not None:
            watcher.stop()

    return 0


__all__ = ["run_repl"]
