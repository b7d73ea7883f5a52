"""Persistent result store backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from collections import Counter
from pathlib import Path

from docclassify.storage.stats import StorageStats
from docclassify.types import ClassificationResult

logger = logging.getLogger(__name__)

_DEFAULT_MAX_ENTRIES = 10_000
_DEFAULT_DB_PATH = Path.home() / ".docclassify" / "results.db"


class SQLiteResultStorage:
    """SQLite-backed result store with least-recently-accessed pruning.

    Each row holds the full JSON payload plus the columns needed to query
    without decoding it.
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        max_entries: int = _DEFAULT_MAX_ENTRIES,
        auto_prune: bool = True,
    ) -> None:
        self._db_path = Path(db_path) if db_path else _DEFAULT_DB_PATH
        self._max_entries = max_entries
        self._auto_prune = auto_prune
        self._lock = threading.Lock()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._create_table()

    def save(self, result: ClassificationResult) -> None:
        with self._lock:
            now = time.time()
            self._conn.execute(
                """INSERT OR REPLACE INTO results
                   (id, document_id, detected_type_id, confidence_score,
                    ambiguity_level, completed_at, payload,
                    created_at, last_accessed, access_count)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 0)""",
                (
                    result.id, result.document_id, result.detected_type_id,
                    result.confidence_score, result.ambiguity_level.value,
                    result.timestamps.completed.isoformat(), result.to_json(),
                    now, now,
                ),
            )
            self._conn.commit()
            if self._auto_prune:
                self._prune_locked(self._max_entries)

    def get(self, result_id: str) -> ClassificationResult | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT payload FROM results WHERE id = ?", (result_id,)
            ).fetchone()
            if row is None:
                return None
            # Track access for pruning
            self._conn.execute(
                "UPDATE results SET last_accessed = ?, access_count = access_count + 1 WHERE id = ?",
                (time.time(), result_id),
            )
            self._conn.commit()
        return ClassificationResult.from_json(row["payload"])

    def find_by_document_id(self, document_id: str) -> list[ClassificationResult]:
        """Results for a document, newest first."""
        return self._query(
            "SELECT payload FROM results WHERE document_id = ? ORDER BY completed_at DESC",
            (document_id,),
        )

    def find_by_type(self, type_id: str) -> list[ClassificationResult]:
        """Results whose detected type is ``type_id``, most confident first."""
        return self._query(
            "SELECT payload FROM results WHERE detected_type_id = ? ORDER BY confidence_score DESC",
            (type_id,),
        )

    def all_results(self) -> list[ClassificationResult]:
        return self._query("SELECT payload FROM results ORDER BY completed_at DESC", ())

    def access_count(self, result_id: str) -> int:
        with self._lock:
            row = self._conn.execute(
                "SELECT access_count FROM results WHERE id = ?", (result_id,)
            ).fetchone()
        return row["access_count"] if row else 0

    def delete(self, result_id: str) -> bool:
        with self._lock:
            cursor = self._conn.execute("DELETE FROM results WHERE id = ?", (result_id,))
            self._conn.commit()
        return cursor.rowcount > 0

    def prune(self, max_entries: int | None = None) -> int:
        """Drop least recently accessed results above ``max_entries``. Returns count deleted."""
        with self._lock:
            return self._prune_locked(self._max_entries if max_entries is None else max_entries)

    def clear(self) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM results")
            self._conn.commit()

    def stats(self) -> StorageStats:
        with self._lock:
            rows = self._conn.execute(
                "SELECT document_id, detected_type_id, confidence_score, ambiguity_level FROM results"
            ).fetchall()
        if not rows:
            return StorageStats()
        return StorageStats(
            total_results=len(rows),
            documents=len({r["document_id"] for r in rows}),
            average_confidence=sum(r["confidence_score"] for r in rows) / len(rows),
            by_ambiguity=dict(Counter(r["ambiguity_level"] for r in rows)),
            by_detected_type=dict(
                Counter(r["detected_type_id"] for r in rows if r["detected_type_id"])
            ),
        )

    def __len__(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) FROM results").fetchone()
        return row[0]

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _query(self, sql: str, params: tuple) -> list[ClassificationResult]:
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [ClassificationResult.from_json(r["payload"]) for r in rows]

    def _prune_locked(self, max_entries: int) -> int:
        count = self._conn.execute("SELECT COUNT(*) FROM results").fetchone()[0]
        excess = count - max_entries
        if excess <= 0:
            return 0
        cursor = self._conn.execute(
            """DELETE FROM results WHERE id IN (
                   SELECT id FROM results ORDER BY last_accessed ASC, rowid ASC LIMIT ?
               )""",
            (excess,),
        )
        self._conn.commit()
        logger.debug("Pruned %d stored results", cursor.rowcount)
        return cursor.rowcount

    def _create_table(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS results (
                id TEXT PRIMARY KEY,
                document_id TEXT NOT NULL,
                detected_type_id TEXT,
                confidence_score REAL,
                ambiguity_level TEXT,
                completed_at TEXT,
                payload TEXT NOT NULL,
                created_at REAL,
                last_accessed REAL,
                access_count INTEGER DEFAULT 0
            )
        """)
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_results_document ON results (document_id)"
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_results_type ON results (detected_type_id)"
        )
        self._conn.commit()
