import pytest

from notecorpus.domain import Corpus, Segment
from notecorpus.ingestion import NoteParser
from notecorpus.shared.exceptions import NotFoundError
from notecorpus.storage import CorpusStore


def make_segment(segment_id: str, body: str = "body", ordinal: int = 0) -> Segment:
    return Segment(id=segment_id, heading=segment_id, source_url=None, body=body, source="x.md", ordinal=ordinal)


def test_empty_store():
    store = CorpusStore()
    assert len(store) == 0
    assert list(store.all()) == []
    assert store.snapshot().generation == 0


def test_load_and_get(sample_text):
    segments = NoteParser().parse_text(sample_text, "notes.swift")
    store = CorpusStore()
    corpus = store.load(segments)
    assert corpus is store.snapshot()
    assert corpus.generation == 1
    assert corpus.sources == ("notes.swift",)
    for segment in segments:
        assert store.get(segment.id) is segment
        assert store.find(segment.id) is segment


def test_get_unknown_id():
    store = CorpusStore()
    store.load([make_segment("a")])
    with pytest.raises(NotFoundError) as excinfo:
        store.get("missing")
    assert excinfo.value.segment_id == "missing"
    assert store.find("missing") is None


def test_all_is_ordered_and_restartable():
    store = CorpusStore()
    store.load([make_segment("a", ordinal=0), make_segment("b", ordinal=1), make_segment("c", ordinal=2)])
    view = store.all()
    assert [s.id for s in view] == ["a", "b", "c"]
    assert [s.id for s in view] == ["a", "b", "c"]
    assert len(view) == 3


def test_all_stays_on_its_snapshot():
    store = CorpusStore()
    store.load([make_segment("old")])
    view = store.all()
    store.load([make_segment("new-1"), make_segment("new-2")])
    assert [s.id for s in view] == ["old"]
    assert view.generation == 1
    assert [s.id for s in store.all()] == ["new-1", "new-2"]


def test_load_replaces_contents():
    store = CorpusStore()
    store.load([make_segment("a")])
    store.load([make_segment("b")])
    assert store.find("a") is None
    assert store.get("b").id == "b"
    assert store.snapshot().generation == 2


def test_publish_prebuilt_corpus():
    store = CorpusStore()
    corpus = Corpus(segments=(make_segment("a"),), generation=7)
    store.publish(corpus)
    assert store.snapshot() is corpus
    assert store.load([]).generation == 8


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        Corpus(segments=(make_segment("a"), make_segment("a", body="other")))


def test_segments_are_immutable():
    segment = make_segment("a")
    with pytest.raises(AttributeError):
        segment.body = "changed"
