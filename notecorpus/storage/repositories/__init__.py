"""Repository implementations for persisted snapshots."""

from .base import BaseRepository
from .segment_repo import SegmentRepository

__all__ = ["BaseRepository", "SegmentRepository"]
