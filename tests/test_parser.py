import pytest

from notecorpus.domain import HeadingLine, PlainTextLine
from notecorpus.ingestion import LineClassifier, NoteParser
from notecorpus.shared.exceptions import MalformedInputError
from notecorpus.shared.hashing import HashingService


class TestLineClassifier:
    def test_mark_heading(self):
        parsed = LineClassifier().classify("// MARK: - Showing and hiding views")
        assert parsed == HeadingLine("// MARK: - Showing and hiding views", "Showing and hiding views")

    def test_mark_without_dash_and_hash_comment(self):
        classifier = LineClassifier()
        assert classifier.classify("//MARK: Layout").title == "Layout"
        assert classifier.classify("# MARK: Helpers").title == "Helpers"

    def test_markdown_heading(self):
        parsed = LineClassifier().classify("## Navigation")
        assert isinstance(parsed, HeadingLine)
        assert parsed.title == "Navigation"

    @pytest.mark.parametrize(
        "line",
        [
            "// ================================",
            "// https://www.hackingwithswift.com/books/ios-swiftui/showing-and-hiding-views",
            "#if DEBUG",
            "NavigationLink(destination: Text(\"Detail\")) {",
            "",
        ],
    )
    def test_plain_lines(self, line):
        assert LineClassifier().classify(line) == PlainTextLine(line)

    def test_custom_pattern_requires_title_group(self):
        with pytest.raises(ValueError):
            LineClassifier(r"^=== .+$")

    def test_custom_pattern(self):
        classifier = LineClassifier(r"^=== (?P<title>.+) ===$")
        assert classifier.classify("=== Lists ===").title == "Lists"
        assert isinstance(classifier.classify("// MARK: - Lists"), PlainTextLine)


class TestNoteParser:
    def test_sample_headings_in_order(self, sample_text):
        segments = NoteParser().parse_text(sample_text, "notes.swift")
        assert [s.heading for s in segments] == [
            "",
            "Sharing SwiftUI state with @ObservedObject",
            "Storing user settings with UserDefaults",
            "Pushing new views onto the stack using NavigationLink",
            "How ScrollView lets us work with scrolling data",
            "Working with hierarchical Codable data",
            "How ScrollView lets us work with scrolling data",
        ]
        assert [s.ordinal for s in segments] == list(range(7))

    def test_preamble_segment(self, sample_text):
        preamble = NoteParser().parse_text(sample_text, "notes.swift")[0]
        assert preamble.heading == ""
        assert preamble.body == "// SwiftUI Notes:\n// ================================"
        assert preamble.source_url is None

    def test_blank_preamble_is_dropped(self):
        segments = NoteParser().parse_text("\n\n// MARK: - Only\nbody\n", "a.swift")
        assert len(segments) == 1
        assert segments[0].heading == "Only"
        assert segments[0].ordinal == 0

    def test_text_without_headings_is_one_segment(self):
        segments = NoteParser().parse_text("\nfirst line\n\nsecond line\n\n", "plain.txt")
        assert len(segments) == 1
        assert segments[0].heading == ""
        assert segments[0].body == "first line\n\nsecond line"

    def test_empty_text(self):
        assert NoteParser().parse_text("", "empty.txt") == []
        assert NoteParser().parse_text("\n \n", "blank.txt") == []

    def test_body_keeps_heading_line_and_trims_blank_edges(self, sample_text):
        storing = NoteParser().parse_text(sample_text, "notes.swift")[2]
        assert storing.body.splitlines()[0] == "// MARK: - Storing user settings with UserDefaults"
        assert not storing.body.startswith("\n")
        assert not storing.body.endswith("\n")
        assert "\n\n// !!!" in storing.body

    def test_heading_only_segment(self, sample_text):
        codable = NoteParser().parse_text(sample_text, "notes.swift")[5]
        assert codable.body.count("\n") == 1
        assert codable.source_url.endswith("working-with-hierarchical-codable-data")

    def test_source_url_and_tags(self, sample_text):
        segments = NoteParser().parse_text(sample_text, "notes.swift")
        assert segments[1].source_url == (
            "https://www.hackingwithswift.com/books/ios-swiftui/sharing-swiftui-state-with-observedobject"
        )
        assert segments[2].tags == ("important",)
        assert segments[3].tags == ()

    def test_hashtags(self):
        text = "# MARK: Tags\nSee #navigation and #Lists, not page#anchor or ## headings\n"
        segment = NoteParser().parse_text(text, "t.md")[0]
        assert segment.tags == ("navigation", "lists")

    def test_comments_in_code_fence_are_not_headings(self):
        text = "# Setup\nInstall it:\n```bash\n# install deps\npip install x\n```\nDone.\n"
        segments = NoteParser().parse_text(text, "setup.md")
        assert [s.heading for s in segments] == ["Setup"]
        assert segments[0].body == text.rstrip("\n")

    def test_heading_after_fence_closes(self):
        text = "# One\n```python\n# not a heading\n```\n## Two\nbody\n"
        segments = NoteParser().parse_text(text, "two.md")
        assert [s.heading for s in segments] == ["One", "Two"]

    def test_info_string_does_not_close_fence(self):
        text = "# One\n~~~\n```python\n# still code\n~~~\n# Two\n"
        segments = NoteParser().parse_text(text, "nested.md")
        assert [s.heading for s in segments] == ["One", "Two"]

    def test_compiler_directives_are_not_tags(self):
        text = (
            "// MARK: - Previews\n"
            "#if DEBUG\n"
            "#Preview {\n"
            "    ContentView()\n"
            "}\n"
            "#endif\n"
            'if #available(iOS 17, *) { button.addTarget(self, action: #selector(tap), for: .touchUpInside) }\n'
        )
        segment = NoteParser().parse_text(text, "previews.swift")[0]
        assert segment.tags == ()

    def test_fenced_hashtags_ignored(self):
        text = "# Shell\nSee #setup\n```bash\necho #nottag\n```\n"
        segment = NoteParser().parse_text(text, "shell.md")[0]
        assert segment.tags == ("setup",)

    def test_reconstruction_modulo_blank_lines(self, sample_text):
        segments = NoteParser().parse_text(sample_text, "notes.swift")
        joined = "\n".join(s.body for s in segments)
        original = [line for line in sample_text.splitlines() if line.strip()]
        rebuilt = [line for line in joined.splitlines() if line.strip()]
        assert rebuilt == original

    def test_ids_are_stable_and_unique(self, sample_text):
        first = NoteParser().parse_text(sample_text, "notes.swift")
        second = NoteParser().parse_text(sample_text, "notes.swift")
        assert [s.id for s in first] == [s.id for s in second]
        assert len({s.id for s in first}) == len(first)
        assert first[3].id == HashingService.segment_id("notes.swift", first[3].heading, 3)

    def test_identical_sections_have_distinct_ids(self, sample_text):
        segments = NoteParser().parse_text(sample_text, "notes.swift")
        assert segments[4].body == segments[6].body
        assert segments[4].content_hash == segments[6].content_hash
        assert segments[4].id != segments[6].id

    def test_crlf_input(self):
        segments = NoteParser().parse_text("// MARK: - A\r\nline\r\n// MARK: - B\r\n", "crlf.swift")
        assert [s.body for s in segments] == ["// MARK: - A\nline", "// MARK: - B"]


class TestParseFile:
    def test_parse_file(self, sample_path):
        segments = NoteParser().parse(str(sample_path))
        assert len(segments) == 7
        assert all(s.source == str(sample_path) for s in segments)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.swift"
        path.write_bytes(b"// MARK: - Bad\n\xff\xfe\x00 not utf-8\n")
        with pytest.raises(MalformedInputError) as excinfo:
            NoteParser().parse(str(path))
        assert excinfo.value.path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedInputError):
            NoteParser().parse(str(tmp_path / "missing.swift"))
