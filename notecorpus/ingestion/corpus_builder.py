"""Build a Corpus from source files in one indexing pass."""

import glob as _glob
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from notecorpus.domain import Corpus, Segment
from notecorpus.shared.config import IndexerConfig
from notecorpus.shared.exceptions import MalformedInputError

from .lines import LineClassifier
from .parsers import BaseSegmentParser, NoteParser

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one indexing pass.

    Attributes:
        corpus: Freshly built snapshot (not yet published)
        errors: Files skipped because they could not be read as text
    """

    corpus: Corpus
    errors: List[MalformedInputError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CorpusBuilder:
    """
    Expand input paths, parse every file and assemble a Corpus.

    A file that fails to decode is reported in ``BuildResult.errors``; the
    remaining files are still indexed.
    """

    def __init__(self, config: Optional[IndexerConfig] = None, parser: Optional[BaseSegmentParser] = None):
        self.config = config or IndexerConfig()
        self.parser = parser or NoteParser(LineClassifier(self.config.heading_regex))

    def expand_inputs(self, patterns: Iterable[str]) -> List[str]:
        """Resolve files, directories and glob patterns into an ordered file list."""
        files: List[str] = []
        for pattern in patterns:
            if os.path.isdir(pattern):
                files.extend(self._walk(pattern))
                continue
            hits = sorted(_glob.glob(pattern, recursive=True))
            if not hits:
                # keep missing paths so the pass reports them
                hits = [pattern]
            for hit in hits:
                if os.path.isdir(hit):
                    files.extend(self._walk(hit))
                else:
                    files.append(hit)
        # dedupe and keep order
        seen = set()
        out = []
        for path in files:
            key = os.path.normcase(os.path.abspath(path))
            if key not in seen:
                seen.add(key)
                out.append(path)
        return out

    def _walk(self, root: str) -> List[str]:
        found: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for name in sorted(filenames):
                if self._accepts(name):
                    found.append(os.path.join(dirpath, name))
        return found

    def _accepts(self, name: str) -> bool:
        if not self.config.extensions:
            return True
        return os.path.splitext(name)[1].lower() in self.config.extensions

    def build(self, patterns: Sequence[str], generation: int = 0) -> BuildResult:
        """
        Run one indexing pass.

        Args:
            patterns: Files, directories or glob patterns
            generation: Generation number stamped on the new snapshot

        Returns:
            BuildResult holding the new Corpus and per-file errors
        """
        segments: List[Segment] = []
        sources: List[str] = []
        errors: List[MalformedInputError] = []

        for path in self.expand_inputs(patterns):
            try:
                parsed = self.parser.parse(path)
            except MalformedInputError as exc:
                logger.warning("skipping %s: %s", path, exc.reason)
                errors.append(exc)
                continue
            logger.debug("parsed %s -> %d segments", path, len(parsed))
            segments.extend(parsed)
            sources.append(path)

        corpus = Corpus(segments=tuple(segments), generation=generation, sources=tuple(sources))
        logger.info(
            "indexed %d segments from %d files (generation %d, %d errors)",
            len(corpus),
            len(sources),
            generation,
            len(errors),
        )
        return BuildResult(corpus=corpus, errors=errors)


__all__ = ["CorpusBuilder", "BuildResult"]
