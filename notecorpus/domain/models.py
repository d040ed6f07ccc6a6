"""Domain models for the note corpus.

Segments and corpora are immutable. A re-indexing pass builds a new Corpus
instead of editing the published one.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class HeadingLine:
    """A line that opens a new segment."""

    text: str
    title: str


@dataclass(frozen=True)
class PlainTextLine:
    """Any other line, including comments and code fragments."""

    text: str


ParsedLine = Union[HeadingLine, PlainTextLine]


@dataclass(frozen=True)
class Segment:
    """A contiguous span of note text under one heading.

    Attributes:
        id: Stable hash of (source path, heading, ordinal)
        heading: Section title, empty for text before the first heading
        source_url: First reference link found in the body
        body: Verbatim text including the heading line, blank edges trimmed
        source: Path of the file the segment was parsed from
        ordinal: Position of the segment within its file
        tags: Lower-case tags found in the body
        content_hash: Hash of the body; changes whenever the section is edited
    """

    id: str
    heading: str
    source_url: Optional[str]
    body: str
    source: str
    ordinal: int
    tags: Tuple[str, ...] = ()
    content_hash: str = ""


@dataclass(frozen=True)
class DuplicatePair:
    """Two segments whose bodies are near-identical.

    ``first`` always precedes ``second`` in corpus order.
    """

    first: Segment
    second: Segment
    similarity: float


@dataclass(frozen=True)
class Corpus:
    """One published snapshot of the indexed segments."""

    segments: Tuple[Segment, ...] = ()
    generation: int = 0
    sources: Tuple[str, ...] = ()
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _by_id: Mapping[str, Segment] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        segments = tuple(self.segments)
        by_id = {}
        for segment in segments:
            if segment.id in by_id:
                raise ValueError(f"duplicate segment id in corpus: {segment.id}")
            by_id[segment.id] = segment
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "_by_id", MappingProxyType(by_id))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __contains__(self, segment_id: object) -> bool:
        return segment_id in self._by_id

    def lookup(self, segment_id: str) -> Optional[Segment]:
        return self._by_id.get(segment_id)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(segment.id for segment in self.segments)


__all__ = [
    "HeadingLine",
    "PlainTextLine",
    "ParsedLine",
    "Segment",
    "DuplicatePair",
    "Corpus",
]
