"""Storage layer for the note corpus.

Holds the published snapshot, exports it, and optionally mirrors it to
Postgres.
"""

from .adapters import LangChainAdapter
from .export import dump_json, export_json, load_json, segment_from_dict, segment_to_dict
from .repositories import BaseRepository, SegmentRepository
from .store import CorpusStore, SegmentView

__all__ = [
    # Snapshot
    "CorpusStore",
    "SegmentView",
    # Export
    "segment_to_dict",
    "segment_from_dict",
    "dump_json",
    "export_json",
    "load_json",
    # Repositories
    "BaseRepository",
    "SegmentRepository",
    # Adapters
    "LangChainAdapter",
]
