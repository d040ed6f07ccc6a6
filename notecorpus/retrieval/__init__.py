"""Retrieval layer: substring, tag and duplicate queries over a snapshot."""

from .query import QueryEngine
from .similarity import ShingleSimilarity

__all__ = ["QueryEngine", "ShingleSimilarity"]
