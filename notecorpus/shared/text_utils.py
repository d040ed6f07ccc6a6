import re
from typing import List, Optional, Sequence, Tuple


class TextPreprocessor:
    """Text helpers used by the parser and the similarity scorer."""

    URL_RE = re.compile(r"https?://[^\s<>\"')\]]+")
    HASHTAG_RE = re.compile(r"(?<![\w#/&])#([A-Za-z][\w-]*)(?![\w(-])")
    FENCE_RE = re.compile(r"^\s*(```|~~~)\s*([A-Za-z0-9_+-]*)\s*$")
    # compiler directives and built-in macros that appear in code fragments
    DIRECTIVES = frozenset(
        {
            "if", "elseif", "else", "endif", "ifdef", "ifndef", "define", "undef",
            "include", "import", "pragma", "available", "unavailable", "selector",
            "keypath", "preview", "warning", "error", "sourcelocation", "file",
            "fileid", "filepath", "line", "column", "function", "dsohandle",
            "colorliteral", "imageliteral", "fileliteral", "externalmacro",
        }
    )
    TOKEN_RE = re.compile(r"\w+")
    IMPORTANT_RE = re.compile(r"^\s*(?://+|#+)?\s*!!!\s*$")

    @staticmethod
    def trim_blank_lines(lines: Sequence[str]) -> List[str]:
        start, end = 0, len(lines)
        while start < end and not lines[start].strip():
            start += 1
        while end > start and not lines[end - 1].strip():
            end -= 1
        return list(lines[start:end])

    @staticmethod
    def normalize_whitespace(text: str) -> str:
        return " ".join(text.split())

    def tokenize(self, text: str) -> List[str]:
        return [token.lower() for token in self.TOKEN_RE.findall(text)]

    def shingles(self, text: str, size: int) -> List[Tuple[str, ...]]:
        tokens = self.tokenize(text)
        if not tokens:
            return []
        if len(tokens) <= size:
            return [tuple(tokens)]
        return [tuple(tokens[i : i + size]) for i in range(len(tokens) - size + 1)]

    def extract_url(self, text: str) -> Optional[str]:
        match = self.URL_RE.search(text)
        if not match:
            return None
        return match.group(0).rstrip(".,;:")

    def track_fence(self, line: str, fence: Optional[str]) -> Optional[str]:
        """Return the open fence marker after ``line``, or None outside a fence.

        A fence closes on a bare line of the same marker, so an info string
        such as ```` ```python ```` inside a fence does not close it.
        """
        match = self.FENCE_RE.match(line)
        if not match:
            return fence
        marker, info = match.group(1), match.group(2)
        if fence is None:
            return marker
        if marker == fence and not info:
            return None
        return fence

    def extract_tags(self, text: str) -> Tuple[str, ...]:
        """Collect ``#tags`` and the ``!!!`` marker, skipping fenced code and directives."""
        tags: List[str] = []
        fence: Optional[str] = None
        for line in text.splitlines():
            in_fence = fence is not None
            fence = self.track_fence(line, fence)
            if in_fence or fence is not None:
                continue
            if self.IMPORTANT_RE.match(line):
                if "important" not in tags:
                    tags.append("important")
                continue
            for match in self.HASHTAG_RE.finditer(line):
                tag = match.group(1).lower()
                if tag in self.DIRECTIVES:
                    continue
                if tag not in tags:
                    tags.append(tag)
        return tuple(tags)


__all__ = ["TextPreprocessor"]
