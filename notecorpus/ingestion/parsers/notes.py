"""Heading-delimited note parser."""

from typing import List, Optional

from notecorpus.domain import HeadingLine, Segment
from notecorpus.shared.hashing import HashingService
from notecorpus.shared.text_utils import TextPreprocessor

from ..lines import LineClassifier
from .base import BaseSegmentParser


class NoteParser(BaseSegmentParser):
    """Split note text into Segments at heading lines.

    The heading line stays in the segment body so that joining the bodies
    gives back the source text, minus blank lines at segment edges.
    """

    def __init__(
        self,
        classifier: Optional[LineClassifier] = None,
        preprocessor: Optional[TextPreprocessor] = None,
    ):
        super().__init__(preprocessor)
        self.classifier = classifier or LineClassifier()

    def parse_text(self, raw: str, source: str) -> List[Segment]:
        """
        Parse raw note text into ordered Segments.

        Args:
            raw: Full text of one note file
            source: Path recorded on each segment and used for its id

        Returns:
            Segments in file order; text before the first heading becomes a
            segment with an empty heading unless it is blank
        """
        segments: List[Segment] = []
        heading = ""
        buffer: List[str] = []
        seen_heading = False
        fence: Optional[str] = None

        def flush() -> None:
            lines = self.preprocessor.trim_blank_lines(buffer)
            buffer.clear()
            if not lines and not seen_heading:
                return
            segments.append(self._build(source, heading, len(segments), "\n".join(lines)))

        for line in raw.splitlines():
            in_fence = fence is not None
            fence = self.preprocessor.track_fence(line, fence)
            if in_fence or fence is not None:
                # code fence lines are never headings
                buffer.append(line)
                continue
            parsed = self.classifier.classify(line)
            if isinstance(parsed, HeadingLine):
                if seen_heading or buffer:
                    flush()
                heading = parsed.title
                seen_heading = True
            buffer.append(line)

        if seen_heading or buffer:
            flush()
        return segments

    def _build(self, source: str, heading: str, ordinal: int, body: str) -> Segment:
        return Segment(
            id=HashingService.segment_id(source, heading, ordinal),
            heading=heading,
            source_url=self.preprocessor.extract_url(body),
            body=body,
            source=source,
            ordinal=ordinal,
            tags=self.preprocessor.extract_tags(body),
            content_hash=HashingService.content_hash(body),
        )


__all__ = ["NoteParser"]
