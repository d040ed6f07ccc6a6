"""Shared utilities and configuration for the note corpus indexer."""

from .config import IndexerConfig, load_config
from .exceptions import MalformedInputError, NoteCorpusError, NotFoundError
from .hashing import HashingService, Slugifier
from .text_utils import TextPreprocessor

__all__ = [
    "IndexerConfig",
    "load_config",
    "NoteCorpusError",
    "MalformedInputError",
    "NotFoundError",
    "HashingService",
    "Slugifier",
    "TextPreprocessor",
]
