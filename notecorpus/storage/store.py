"""In-memory corpus store.

The store holds one reference to the published Corpus. Publishing a new
corpus is a single attribute assignment, so readers never lock and never see
a half-built snapshot.
"""

from typing import Iterable, Iterator, Optional

from notecorpus.domain import Corpus, Segment
from notecorpus.shared.exceptions import NotFoundError


class SegmentView:
    """Lazy, restartable iteration over one snapshot."""

    def __init__(self, corpus: Corpus):
        self._corpus = corpus

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._corpus.segments)

    def __len__(self) -> int:
        return len(self._corpus)

    @property
    def generation(self) -> int:
        return self._corpus.generation


class CorpusStore:
    """Holds the current Corpus snapshot.

    Example:
        >>> store = CorpusStore()
        >>> store.load(parser.parse("notes.swift"))
        >>> store.get(segment_id)
    """

    def __init__(self, corpus: Optional[Corpus] = None):
        self._snapshot: Corpus = corpus if corpus is not None else Corpus()

    def snapshot(self) -> Corpus:
        """Return the currently published corpus."""
        return self._snapshot

    def publish(self, corpus: Corpus) -> Corpus:
        """Replace the published corpus with an already-built one."""
        self._snapshot = corpus
        return corpus

    def load(self, segments: Iterable[Segment]) -> Corpus:
        """Build a corpus from segments and publish it.

        Args:
            segments: Segments in source order; ids must be unique

        Returns:
            The newly published Corpus
        """
        current = self._snapshot
        segments = tuple(segments)
        sources = []
        for segment in segments:
            if segment.source not in sources:
                sources.append(segment.source)
        corpus = Corpus(segments=segments, generation=current.generation + 1, sources=tuple(sources))
        return self.publish(corpus)

    def get(self, segment_id: str) -> Segment:
        """Look up a segment by id.

        Raises:
            NotFoundError: If the id is not in the current snapshot
        """
        segment = self._snapshot.lookup(segment_id)
        if segment is None:
            raise NotFoundError(segment_id)
        return segment

    def find(self, segment_id: str) -> Optional[Segment]:
        return self._snapshot.lookup(segment_id)

    def all(self) -> SegmentView:
        """Iterate segments of the current snapshot in source order."""
        return SegmentView(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)


__all__ = ["CorpusStore", "SegmentView"]
