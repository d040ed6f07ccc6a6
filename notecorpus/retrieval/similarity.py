"""Near-duplicate scoring based on hashed word shingles."""

from typing import FrozenSet, Optional

from notecorpus.shared.hashing import HashingService
from notecorpus.shared.text_utils import TextPreprocessor


class ShingleSimilarity:
    """Jaccard overlap of hashed word shingles.

    Bodies that are equal after whitespace normalisation score exactly 1.0.
    """

    def __init__(self, size: int = 3, preprocessor: Optional[TextPreprocessor] = None):
        if size < 1:
            raise ValueError("shingle size must be at least 1")
        self.size = size
        self.preprocessor = preprocessor or TextPreprocessor()

    def fingerprint(self, text: str) -> FrozenSet[int]:
        return frozenset(
            HashingService.shingle_hash(shingle)
            for shingle in self.preprocessor.shingles(text, self.size)
        )

    @staticmethod
    def jaccard(left: FrozenSet[int], right: FrozenSet[int]) -> float:
        if not left or not right:
            return 0.0
        return len(left & right) / len(left | right)

    def score(self, left: str, right: str) -> float:
        norm_left = self.preprocessor.normalize_whitespace(left)
        norm_right = self.preprocessor.normalize_whitespace(right)
        if not norm_left or not norm_right:
            return 0.0
        if norm_left == norm_right:
            return 1.0
        return self.jaccard(self.fingerprint(left), self.fingerprint(right))


__all__ = ["ShingleSimilarity"]
