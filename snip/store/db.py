from __future__ import annotations
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from ..errors import StorageFailure

SCHEMA = [
    """CREATE TABLE IF NOT EXISTS snip (
        uuid TEXT PRIMARY KEY,
        timestamp TEXT NOT NULL,
        name TEXT NOT NULL,
        data TEXT NOT NULL,
        word_count INTEGER NOT NULL DEFAULT 0
    );""",
    """CREATE TABLE IF NOT EXISTS snip_index (
        snip_uuid TEXT NOT NULL REFERENCES snip(uuid),
        term TEXT NOT NULL,
        count INTEGER NOT NULL,
        PRIMARY KEY (snip_uuid, term)
    );""",
    "CREATE INDEX IF NOT EXISTS snip_index_term ON snip_index(term);",
    """CREATE TABLE IF NOT EXISTS snip_attachment (
        uuid TEXT PRIMARY KEY,
        snip_uuid TEXT NOT NULL REFERENCES snip(uuid),
        timestamp TEXT NOT NULL,
        name TEXT NOT NULL,
        size INTEGER NOT NULL,
        data BLOB NOT NULL
    );""",
    "CREATE INDEX IF NOT EXISTS snip_attachment_parent ON snip_attachment(snip_uuid);",
]

def now() -> datetime:
    return datetime.now(timezone.utc)

def to_ts(dt: datetime) -> str:
    # toujours en UTC, largeur fixe: l'ordre texte (ORDER BY timestamp) suit le temps réel
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")

def from_ts(value: str) -> datetime:
    # les anciennes bases écrivent un suffixe "Z"
    return datetime.fromisoformat(value.replace("Z", "+00:00"))

class SnipDB:
    """Handle SQLite explicite, passé à chaque opération.

    `path` peut valoir ":memory:" pour les tests.
    """
    def __init__(self, path: str | Path):
        self.path = str(path)
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            # autocommit: les transactions sont ouvertes explicitement
            self.conn = sqlite3.connect(self.path, isolation_level=None)
            self.conn.execute("PRAGMA foreign_keys=ON;")
            if not self._has_schema():
                self.conn.execute("PRAGMA journal_mode=WAL;")
                self._init_schema()
        except (sqlite3.Error, OSError) as e:
            raise StorageFailure(f"ouverture de {self.path} impossible: {e}") from e

    def _has_schema(self) -> bool:
        # lecture seule: aucun verrou d'écriture pour les lecteurs d'une base existante
        rows = self.conn.execute(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name IN ('snip', 'snip_index', 'snip_attachment')"
        ).fetchone()
        return rows[0] == 3

    def _init_schema(self) -> None:
        with self.transaction() as cur:
            for stmt in SCHEMA:
                cur.execute(stmt)

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            pass

    def __enter__(self) -> "SnipDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Unité atomique: tout est validé, ou rien (ROLLBACK sur exception)."""
        cur = self.conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            raise StorageFailure(f"BEGIN impossible: {e}") from e
        try:
            yield cur
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StorageFailure(str(e)) from e
        except BaseException:
            self.conn.rollback()
            raise
        else:
            try:
                cur.execute("COMMIT")
            except sqlite3.Error as e:
                self.conn.rollback()
                raise StorageFailure(f"COMMIT impossible: {e}") from e

    def query(self, sql: str, params: tuple | dict = ()) -> list[tuple]:
        try:
            cur = self.conn.cursor()
            cur.execute(sql, params)
            return cur.fetchall()
        except sqlite3.Error as e:
            raise StorageFailure(str(e)) from e

    # ---------------- Stats ----------------
    def stats(self) -> dict:
        (snips,), = self.query("SELECT COUNT(*) FROM snip")
        (terms,), = self.query("SELECT COUNT(DISTINCT term) FROM snip_index")
        (atts,), = self.query("SELECT COUNT(*) FROM snip_attachment")
        return {"snips": snips, "terms": terms, "attachments": atts}
