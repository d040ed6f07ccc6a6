"""Ingestion layer: line classification, note parsing and indexing passes.

Reads source files and produces Segments. Does not publish snapshots or
answer queries.
"""

from .corpus_builder import BuildResult, CorpusBuilder
from .lines import LineClassifier
from .parsers import BaseSegmentParser, NoteParser

__all__ = [
    "LineClassifier",
    "BaseSegmentParser",
    "NoteParser",
    "CorpusBuilder",
    "BuildResult",
]
