"""Request validation for CLI and REPL input."""

from typing import Optional


class ValidationError(ValueError):
    """Invalid user input."""


class RequestValidator:
    MAX_QUERY_CHARS = 500

    @classmethod
    def validate_query(cls, query: Optional[str]) -> str:
        if query is None or not query.strip():
            raise ValidationError("query must not be empty")
        if len(query) > cls.MAX_QUERY_CHARS:
            raise ValidationError(f"query longer than {cls.MAX_QUERY_CHARS} characters")
        return query

    @staticmethod
    def validate_threshold(value) -> float:
        try:
            threshold = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"threshold must be a number, got {value!r}") from None
        if not 0.0 < threshold <= 1.0:
            raise ValidationError("threshold must be in (0, 1]")
        return threshold

    @staticmethod
    def validate_tag(tag: Optional[str]) -> str:
        cleaned = (tag or "").strip().lstrip("#")
        if not cleaned:
            raise ValidationError("tag must not be empty")
        return cleaned.lower()

    @staticmethod
    def validate_segment_id(segment_id: Optional[str]) -> str:
        cleaned = (segment_id or "").strip()
        if not cleaned:
            raise ValidationError("segment id must not be empty")
        return cleaned


__all__ = ["RequestValidator", "ValidationError"]
