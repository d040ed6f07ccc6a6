"""JSON export of corpus snapshots for external tools."""

import json
from typing import IO, Any, Dict, Iterable, List

from notecorpus.domain import Segment
from notecorpus.shared.hashing import HashingService


def segment_to_dict(segment: Segment) -> Dict[str, Any]:
    return {
        "id": segment.id,
        "heading": segment.heading,
        "sourceUrl": segment.source_url,
        "body": segment.body,
        "source": segment.source,
        "ordinal": segment.ordinal,
        "tags": list(segment.tags),
    }


def segment_from_dict(row: Dict[str, Any]) -> Segment:
    body = row.get("body") or ""
    return Segment(
        id=row["id"],
        heading=row.get("heading") or "",
        source_url=row.get("sourceUrl"),
        body=body,
        source=row.get("source") or "",
        ordinal=int(row.get("ordinal") or 0),
        tags=tuple(row.get("tags") or ()),
        content_hash=HashingService.content_hash(body),
    )


def dump_json(segments: Iterable[Segment], indent: int = 2) -> str:
    return json.dumps([segment_to_dict(s) for s in segments], ensure_ascii=False, indent=indent)


def export_json(segments: Iterable[Segment], handle: IO[str], indent: int = 2) -> int:
    """Write segments as a JSON array; returns the number written."""
    rows = [segment_to_dict(s) for s in segments]
    json.dump(rows, handle, ensure_ascii=False, indent=indent)
    handle.write("\n")
    return len(rows)


def load_json(handle: IO[str]) -> List[Segment]:
    data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of segments")
    return [segment_from_dict(row) for row in data]


__all__ = ["segment_to_dict", "segment_from_dict", "dump_json", "export_json", "load_json"]
