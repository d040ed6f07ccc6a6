"""Error types shared across layers."""


class NoteCorpusError(Exception):
    """Base class for indexer errors."""


class MalformedInputError(NoteCorpusError):
    """A source file could not be read as text.

    Only the offending file is skipped; the rest of an indexing pass proceeds.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class NotFoundError(NoteCorpusError):
    """No segment with the requested id exists in the current snapshot."""

    def __init__(self, segment_id: str):
        super().__init__(f"segment not found: {segment_id}")
        self.segment_id = segment_id


__all__ = ["NoteCorpusError", "MalformedInputError", "NotFoundError"]
