import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv


HEADING_REGEX_DEFAULT = r"^\s*(?:(?://+|#)\s*MARK:\s*-?|#{1,6}(?=\s))\s*(?P<title>.*?)\s*$"
EXTENSIONS_DEFAULT = ".swift,.md,.txt"


@dataclass
class IndexerConfig:
    """Configuration for the indexing pipeline."""

    heading_regex: str = HEADING_REGEX_DEFAULT
    extensions: Tuple[str, ...] = field(default_factory=lambda: _parse_extensions(EXTENSIONS_DEFAULT))
    shingle_size: int = 3
    duplicate_threshold: float = 0.9
    watch_debounce: float = 0.25
    watch_backoff_initial: float = 0.5
    watch_backoff_max: float = 30.0
    log_level: str = "INFO"
    pg_conn: str = ""


def _parse_int(value: Optional[str], default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_extensions(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    out = []
    for item in value.split(","):
        item = item.strip().lower()
        if not item:
            continue
        if not item.startswith("."):
            item = "." + item
        if item not in out:
            out.append(item)
    return tuple(out)


def load_config() -> IndexerConfig:
    """Load configuration from environment variables."""
    load_dotenv()

    shingle_size = _parse_int(os.getenv("NOTES_SHINGLE_SIZE"), 3)
    if shingle_size < 1:
        shingle_size = 1

    config = IndexerConfig(
        heading_regex=os.getenv("NOTES_HEADING_REGEX") or HEADING_REGEX_DEFAULT,
        extensions=_parse_extensions(os.getenv("NOTES_EXTENSIONS", EXTENSIONS_DEFAULT)),
        shingle_size=shingle_size,
        duplicate_threshold=_parse_float(os.getenv("NOTES_DUPLICATE_THRESHOLD"), 0.9),
        watch_debounce=_parse_float(os.getenv("NOTES_WATCH_DEBOUNCE"), 0.25),
        watch_backoff_initial=_parse_float(os.getenv("NOTES_WATCH_BACKOFF_INITIAL"), 0.5),
        watch_backoff_max=_parse_float(os.getenv("NOTES_WATCH_BACKOFF_MAX"), 30.0),
        log_level=os.getenv("NOTES_LOG_LEVEL", "INFO").upper(),
        pg_conn=os.getenv("PG_CONN", ""),
    )
    return config


__all__ = ["IndexerConfig", "load_config", "HEADING_REGEX_DEFAULT"]
