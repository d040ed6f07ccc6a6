"""Indexing context.

``NoteIndex`` owns the published snapshot for one set of inputs and wires
the builder, store, query engine, optional Postgres mirror and watcher
together. It is passed explicitly to whoever needs it.
"""

import logging
import os
import threading
from typing import List, Optional, Sequence

import psycopg  # type: ignore

from notecorpus.ingestion import BuildResult, CorpusBuilder
from notecorpus.retrieval import QueryEngine, ShingleSimilarity
from notecorpus.shared.config import IndexerConfig
from notecorpus.storage import CorpusStore, SegmentRepository
from notecorpus.watch import ChangeWatcher, WatchTarget

logger = logging.getLogger(__name__)


class NoteIndex:
    """Orchestrates indexing passes over a fixed set of inputs.

    Pipeline:
    1. Expand and parse inputs (ingestion layer)
    2. Publish the new snapshot (storage layer)
    3. Mirror it to Postgres when configured (storage layer)

    Example:
        >>> index = NoteIndex(["notes/"], config)
        >>> index.refresh()
        >>> index.query.search("NavigationLink")
    """

    def __init__(
        self,
        inputs: Sequence[str],
        config: Optional[IndexerConfig] = None,
        store: Optional[CorpusStore] = None,
        builder: Optional[CorpusBuilder] = None,
        repository: Optional[SegmentRepository] = None,
    ):
        self.inputs = list(inputs)
        self.config = config or IndexerConfig()
        self.store = store or CorpusStore()
        self.builder = builder or CorpusBuilder(self.config)
        self.repository = repository or SegmentRepository(self.config)
        self.query = QueryEngine(self.store, ShingleSimilarity(self.config.shingle_size))
        self.last_result: Optional[BuildResult] = None
        # serialises rebuilds; readers never take it
        self._rebuild_lock = threading.Lock()
        self._table_ready = False

    def refresh(self) -> BuildResult:
        """Run a full indexing pass and publish the result."""
        with self._rebuild_lock:
            generation = self.store.snapshot().generation + 1
            result = self.builder.build(self.inputs, generation=generation)
            self.store.publish(result.corpus)
            self.last_result = result
            self._mirror(result)
            return result

    def _mirror(self, result: BuildResult) -> None:
        if not self.repository.enabled:
            return
        try:
            if not self._table_ready:
                self.repository.ensure_table()
                self._table_ready = True
            self.repository.save_snapshot(result.corpus)
        except psycopg.Error as exc:
            logger.warning("postgres mirror failed (snapshot still published): %s", exc)

    def watch_targets(self) -> List[WatchTarget]:
        targets: List[WatchTarget] = []
        for pattern in self.inputs:
            if os.path.isdir(pattern):
                targets.append(WatchTarget(pattern, is_dir=True))
        for path in self.builder.expand_inputs(p for p in self.inputs if not os.path.isdir(p)):
            targets.append(WatchTarget(path))
        return targets

    def create_watcher(self, **overrides) -> ChangeWatcher:
        """Build a watcher that refreshes this index on change."""
        options = dict(
            on_change=self.refresh,
            extensions=self.config.extensions,
            debounce=self.config.watch_debounce,
            backoff_initial=self.config.watch_backoff_initial,
            backoff_max=self.config.watch_backoff_max,
        )
        options.update(overrides)
        return ChangeWatcher(self.watch_targets(), **options)


__all__ = ["NoteIndex"]
