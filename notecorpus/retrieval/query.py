"""Query engine over the published corpus snapshot.

Every query reads the store's snapshot reference once and runs entirely on
that snapshot, so a rebuild published mid-query is never mixed in.
"""

from typing import Callable, List, Optional, Sequence

from notecorpus.domain import Corpus, DuplicatePair, Segment
from notecorpus.shared.hashing import HashingService
from notecorpus.storage.store import CorpusStore

from .similarity import ShingleSimilarity

SEARCH_FIELDS = ("heading", "body")


class QueryEngine:
    """Filter-style lookups over segments.

    Results keep corpus order; there is no relevance ranking.

    Example:
        >>> engine = QueryEngine(store)
        >>> engine.search("NavigationLink")
        >>> engine.find_duplicates(0.9)
    """

    def __init__(self, store: CorpusStore, similarity: Optional[ShingleSimilarity] = None):
        self.store = store
        self.similarity = similarity or ShingleSimilarity()

    def filter(self, predicate: Callable[[Segment], bool], corpus: Optional[Corpus] = None) -> List[Segment]:
        snapshot = corpus if corpus is not None else self.store.snapshot()
        return [segment for segment in snapshot.segments if predicate(segment)]

    def search(self, text: str, fields: Sequence[str] = SEARCH_FIELDS) -> List[Segment]:
        """Case-insensitive substring match on heading and/or body.

        Args:
            text: Substring to look for
            fields: Any of "heading" and "body"

        Returns:
            Matching segments in corpus order
        """
        if not text or not text.strip():
            raise ValueError("search text must not be empty")
        unknown = [f for f in fields if f not in SEARCH_FIELDS]
        if unknown or not fields:
            raise ValueError(f"unsupported search fields: {unknown or list(fields)}")
        needle = text.casefold()

        def matches(segment: Segment) -> bool:
            return any(needle in getattr(segment, name).casefold() for name in fields)

        return self.filter(matches)

    def by_tag(self, tag: str) -> List[Segment]:
        wanted = tag.lstrip("#").lower()
        if not wanted:
            raise ValueError("tag must not be empty")
        return self.filter(lambda segment: wanted in segment.tags)

    def by_source(self, path: str) -> List[Segment]:
        key = HashingService.normalize_source(path)
        return self.filter(lambda segment: HashingService.normalize_source(segment.source) == key)

    def find_duplicates(self, threshold: float) -> List[DuplicatePair]:
        """Find segment pairs with near-identical bodies.

        Compares every pair of non-blank bodies, O(n^2) in the number of
        segments. Fingerprints are computed once per segment, so each
        comparison costs one set intersection.

        Args:
            threshold: Minimum similarity in (0, 1]

        Returns:
            Pairs ordered by descending similarity, then by the corpus
            position of the first and second segment
        """
        if not 0.0 < threshold <= 1.0:
            raise ValueError("threshold must be in (0, 1]")

        snapshot = self.store.snapshot()
        prepared = []
        for idx, segment in enumerate(snapshot.segments):
            normalized = self.similarity.preprocessor.normalize_whitespace(segment.body)
            if not normalized:
                continue
            prepared.append((idx, segment, normalized, self.similarity.fingerprint(segment.body)))

        scored = []
        for i, (left_idx, left, left_norm, left_fp) in enumerate(prepared):
            for right_idx, right, right_norm, right_fp in prepared[i + 1 :]:
                if left_norm == right_norm:
                    score = 1.0
                else:
                    score = self.similarity.jaccard(left_fp, right_fp)
                if score >= threshold:
                    scored.append((score, left_idx, right_idx, left, right))

        scored.sort(key=lambda item: (-item[0], item[1], item[2]))
        return [DuplicatePair(first=left, second=right, similarity=score) for score, _, _, left, right in scored]


__all__ = ["QueryEngine", "SEARCH_FIELDS"]
