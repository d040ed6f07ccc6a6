"""Use case orchestration for the note corpus indexer."""

from .index import NoteIndex

__all__ = ["NoteIndex"]
