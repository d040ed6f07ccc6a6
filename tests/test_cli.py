import json

import pytest

from notecorpus.api.cli import create_parser, run
from notecorpus.ingestion import NoteParser
from notecorpus.shared.config import IndexerConfig


def cli(argv):
    args = create_parser().parse_args(argv)
    return run(args, IndexerConfig())


def test_index(sample_path, capsys):
    assert cli(["index", str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert "[ok] generation 1: 7 segment(s) from 1 file(s)" in out


def test_index_reports_bad_file(tmp_path, sample_path, capsys):
    bad = tmp_path / "bad.swift"
    bad.write_bytes(b"\xff\xfe\xfa")
    assert cli(["index", str(sample_path), str(bad)]) == 1
    assert f"[warn] skipped {bad}" in capsys.readouterr().out


def test_index_without_inputs(tmp_path, capsys):
    assert cli(["index", str(tmp_path / "*.swift")]) == 1
    empty = tmp_path / "empty"
    empty.mkdir()
    assert cli(["index", str(empty)]) == 2
    assert "[warn] no input files" in capsys.readouterr().out


def test_search_text(sample_path, capsys):
    assert cli(["search", "NavigationLink", str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert "[ok] 3 segment(s)" in out
    assert "Pushing new views onto the stack using NavigationLink" in out


def test_search_json(sample_path, capsys):
    assert cli(["search", "navigationlink", str(sample_path), "--field", "heading", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert [r["ordinal"] for r in rows] == [3]
    assert rows[0]["sourceUrl"].endswith("pushing-new-views-onto-the-stack-using-navigationlink")


def test_search_rejects_blank_query(sample_path, capsys):
    assert cli(["search", "  ", str(sample_path)]) == 2
    assert "[error] query must not be empty" in capsys.readouterr().out


def test_tag(sample_path, capsys):
    assert cli(["tag", "#important", str(sample_path)]) == 0
    assert "Storing user settings with UserDefaults" in capsys.readouterr().out


def test_get(sample_path, capsys):
    segment = NoteParser().parse(str(sample_path))[3]
    assert cli(["get", segment.id, str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert f"id:      {segment.id}" in out
    assert segment.body in out


def test_get_unknown(sample_path, capsys):
    assert cli(["get", "seg:nope", str(sample_path)]) == 1
    assert "[error] segment not found: seg:nope" in capsys.readouterr().out


def test_dupes(sample_path, capsys):
    assert cli(["dupes", str(sample_path), "--threshold", "0.9", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert len(rows) == 1
    assert rows[0]["similarity"] == 1.0
    assert (rows[0]["first"]["ordinal"], rows[0]["second"]["ordinal"]) == (4, 6)


def test_dupes_bad_threshold(sample_path, capsys):
    assert cli(["dupes", str(sample_path), "--threshold", "1.5"]) == 2
    assert "[error]" in capsys.readouterr().out


def test_export_json_file(tmp_path, sample_path):
    out = tmp_path / "corpus.json"
    assert cli(["export", str(sample_path), "-o", str(out)]) == 0
    rows = json.loads(out.read_text(encoding="utf-8"))
    assert len(rows) == 7
    assert rows[1]["heading"] == "Sharing SwiftUI state with @ObservedObject"


def test_export_documents(sample_path, capsys):
    assert cli(["export", str(sample_path), "--format", "documents"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 7
    row = json.loads(lines[2])
    assert row["metadata"]["tags"] == ["important"]
    assert row["page_content"].startswith("// MARK: - Storing user settings")


def test_repl(sample_path, capsys, monkeypatch):
    commands = iter(
        [
            ":show",
            ":field heading",
            "navigationlink",
            ":field all",
            ":json on",
            "GeometryReader",
            ":json off",
            ":tag important",
            ":dupes 0.9",
            ":get seg:nope",
            ":bogus",
            ":reload",
            ":q",
        ]
    )
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
    assert cli(["repl", str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert "segments:    7" in out
    assert "[ok] field set to heading" in out
    assert "[ok] 1 segment(s)" in out
    assert "[]" in out
    assert "[ok] 1 duplicate pair(s)" in out
    assert "[error] segment not found: seg:nope" in out
    assert "[error] unknown command :bogus" in out
    assert "[ok] generation 2" in out


def test_repl_exits_on_eof(sample_path, monkeypatch):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert cli(["repl", str(sample_path)]) == 0


def test_subcommand_required():
    with pytest.raises(SystemExit):
        create_parser().parse_args([])
