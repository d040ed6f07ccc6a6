"""Text and JSON rendering of query results."""

import json
import os
from typing import List, Sequence

from notecorpus.domain import DuplicatePair, Segment
from notecorpus.ingestion import BuildResult
from notecorpus.storage.export import dump_json, segment_to_dict


class ResponseFormatter:
    PREVIEW_CHARS = 100

    @classmethod
    def _preview(cls, segment: Segment) -> str:
        lines = segment.body.splitlines()
        if segment.heading:
            # skip the heading line itself
            lines = lines[1:]
        rest = " ".join(line.strip() for line in lines if line.strip())
        if len(rest) > cls.PREVIEW_CHARS:
            rest = rest[: cls.PREVIEW_CHARS - 3] + "..."
        return rest

    @classmethod
    def format_segments_text(cls, segments: Sequence[Segment]) -> str:
        if not segments:
            return "[ok] no matching segments"
        lines: List[str] = [f"[ok] {len(segments)} segment(s)"]
        for i, segment in enumerate(segments, 1):
            heading = segment.heading or "<preamble>"
            lines.append(f"  [{i}] {heading}  ({os.path.basename(segment.source)}#{segment.ordinal})")
            lines.append(f"      id: {segment.id}")
            if segment.source_url:
                lines.append(f"      url: {segment.source_url}")
            if segment.tags:
                lines.append(f"      tags: {', '.join(segment.tags)}")
            preview = cls._preview(segment)
            if preview:
                lines.append(f"      {preview}")
        return "\n".join(lines)

    @staticmethod
    def format_segments_json(segments: Sequence[Segment]) -> str:
        return dump_json(segments)

    @staticmethod
    def format_segment_detail(segment: Segment) -> str:
        lines = [
            f"id:      {segment.id}",
            f"heading: {segment.heading or '<preamble>'}",
            f"source:  {segment.source}#{segment.ordinal}",
        ]
        if segment.source_url:
            lines.append(f"url:     {segment.source_url}")
        if segment.tags:
            lines.append(f"tags:    {', '.join(segment.tags)}")
        lines.append("")
        lines.append(segment.body)
        return "\n".join(lines)

    @staticmethod
    def format_duplicates_text(pairs: Sequence[DuplicatePair]) -> str:
        if not pairs:
            return "[ok] no duplicates above threshold"
        lines = [f"[ok] {len(pairs)} duplicate pair(s)"]
        for i, pair in enumerate(pairs, 1):
            first = pair.first.heading or "<preamble>"
            second = pair.second.heading or "<preamble>"
            lines.append(f"  [{i}] sim={pair.similarity:.3f}")
            lines.append(f"      {first} ({os.path.basename(pair.first.source)}#{pair.first.ordinal}) {pair.first.id}")
            lines.append(f"      {second} ({os.path.basename(pair.second.source)}#{pair.second.ordinal}) {pair.second.id}")
        return "\n".join(lines)

    @staticmethod
    def format_duplicates_json(pairs: Sequence[DuplicatePair]) -> str:
        rows = [
            {
                "similarity": round(pair.similarity, 6),
                "first": segment_to_dict(pair.first),
                "second": segment_to_dict(pair.second),
            }
            for pair in pairs
        ]
        return json.dumps(rows, ensure_ascii=False, indent=2)

    @staticmethod
    def format_build_report(result: BuildResult) -> str:
        corpus = result.corpus
        lines = [
            f"[ok] generation {corpus.generation}: {len(corpus)} segment(s) from {len(corpus.sources)} file(s)"
        ]
        for error in result.errors:
            lines.append(f"[warn] skipped {error.path}: {error.reason}")
        return "\n".join(lines)

    @staticmethod
    def format_error(exc: Exception) -> str:
        return f"[error] {exc}"


__all__ = ["ResponseFormatter"]
