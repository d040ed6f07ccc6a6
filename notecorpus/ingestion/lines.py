"""Heading detection for note files.

Headings are a soft convention, so classification returns a tagged variant
instead of raising on lines it does not recognise.
"""

import re
from typing import Union

from notecorpus.domain import HeadingLine, ParsedLine, PlainTextLine
from notecorpus.shared.config import HEADING_REGEX_DEFAULT


class LineClassifier:
    """Classify raw lines as headings or plain text."""

    def __init__(self, heading_regex: Union[str, "re.Pattern[str]"] = HEADING_REGEX_DEFAULT):
        pattern = re.compile(heading_regex) if isinstance(heading_regex, str) else heading_regex
        if "title" not in pattern.groupindex:
            raise ValueError("heading pattern must define a 'title' group")
        self.pattern = pattern

    def classify(self, line: str) -> ParsedLine:
        match = self.pattern.match(line)
        if not match:
            return PlainTextLine(line)
        title = (match.group("title") or "").strip()
        return HeadingLine(line, title)


__all__ = ["LineClassifier"]
