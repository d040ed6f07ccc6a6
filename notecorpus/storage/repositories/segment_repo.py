"""Segment repository implementation.

Mirrors published snapshots into PostgreSQL so other tools can read them.
Every method is a no-op when no connection string is configured.
"""

import json
import logging
from typing import List, Optional

import psycopg  # type: ignore

from notecorpus.domain import Corpus, Segment
from notecorpus.shared.config import IndexerConfig

from .base import BaseRepository

logger = logging.getLogger(__name__)


class SegmentRepository(BaseRepository[Segment]):
    """Repository for Segment rows in the ``note_segments`` table."""

    COLUMNS = "id, heading, source_url, body, source, ordinal, tags, content_hash"

    def __init__(self, config: IndexerConfig):
        self.config = config

    @property
    def enabled(self) -> bool:
        return bool(self.config.pg_conn)

    @property
    def _pg_conn(self) -> str:
        return (self.config.pg_conn or "").replace("postgresql+psycopg", "postgresql")

    def ensure_table(self) -> None:
        """Create the segments table if it doesn't exist."""
        if not self.enabled:
            return

        sql = """
        CREATE TABLE IF NOT EXISTS note_segments (
          id           TEXT PRIMARY KEY,
          heading      TEXT NOT NULL,
          source_url   TEXT,
          body         TEXT NOT NULL,
          source       TEXT NOT NULL,
          ordinal      INTEGER NOT NULL,
          tags         JSONB DEFAULT '[]'::jsonb,
          content_hash TEXT NOT NULL,
          generation   INTEGER NOT NULL,
          updated_at   TIMESTAMPTZ DEFAULT now()
        );
        """
        with psycopg.connect(self._pg_conn, autocommit=True) as conn:
            with conn.cursor() as cur:
                cur.execute(sql)

    def save_snapshot(self, corpus: Corpus) -> int:
        """Replace the rows of every source in the snapshot.

        Runs in a single transaction so readers of the table also see
        either the old or the new rows for a source.

        Returns:
            Number of rows written
        """
        if not self.enabled:
            return 0

        insert_sql = """
        INSERT INTO note_segments (id, heading, source_url, body, source, ordinal, tags, content_hash, generation)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        ON CONFLICT (id) DO UPDATE SET
          heading = EXCLUDED.heading,
          source_url = EXCLUDED.source_url,
          body = EXCLUDED.body,
          source = EXCLUDED.source,
          ordinal = EXCLUDED.ordinal,
          tags = EXCLUDED.tags,
          content_hash = EXCLUDED.content_hash,
          generation = EXCLUDED.generation,
          updated_at = now();
        """
        with psycopg.connect(self._pg_conn) as conn:
            with conn.cursor() as cur:
                if corpus.sources:
                    cur.execute(
                        "DELETE FROM note_segments WHERE source = ANY(%s)",
                        (list(corpus.sources),),
                    )
                for segment in corpus.segments:
                    cur.execute(
                        insert_sql,
                        (
                            segment.id,
                            segment.heading,
                            segment.source_url,
                            segment.body,
                            segment.source,
                            segment.ordinal,
                            json.dumps(list(segment.tags)),
                            segment.content_hash,
                            corpus.generation,
                        ),
                    )
            conn.commit()
        logger.info("mirrored %d segments (generation %d)", len(corpus), corpus.generation)
        return len(corpus)

    def find_by_id(self, entity_id: str) -> Optional[Segment]:
        if not self.enabled:
            return None

        sql = f"SELECT {self.COLUMNS} FROM note_segments WHERE id = %s"
        with psycopg.connect(self._pg_conn) as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (entity_id,))
                row = cur.fetchone()
                if row:
                    return self._row_to_segment(row)
        return None

    def find_all(self) -> List[Segment]:
        if not self.enabled:
            return []

        sql = f"SELECT {self.COLUMNS} FROM note_segments ORDER BY source, ordinal"
        with psycopg.connect(self._pg_conn) as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_segment(row) for row in cur.fetchall()]

    @staticmethod
    def _row_to_segment(row) -> Segment:
        tags = row[6] or []
        if isinstance(tags, str):
            tags = json.loads(tags)
        return Segment(
            id=row[0],
            heading=row[1],
            source_url=row[2],
            body=row[3],
            source=row[4],
            ordinal=row[5],
            tags=tuple(tags),
            content_hash=row[7],
        )


__all__ = ["SegmentRepository"]
