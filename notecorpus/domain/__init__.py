"""Domain entities: segments, corpus snapshots and parse variants."""

from .models import Corpus, DuplicatePair, HeadingLine, ParsedLine, PlainTextLine, Segment

__all__ = [
    "Segment",
    "Corpus",
    "DuplicatePair",
    "HeadingLine",
    "PlainTextLine",
    "ParsedLine",
]
