"""File parsers for ingestion layer."""

from .base import BaseSegmentParser
from .notes import NoteParser

__all__ = ["BaseSegmentParser", "NoteParser"]
