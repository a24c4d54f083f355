import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from snip.index.search import search
from snip.store import documents
from snip.store.db import SnipDB, from_ts, to_ts

def test_timestamps_stored_in_utc():
    ts = datetime(2024, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    raw = to_ts(ts)
    assert raw == "2024-03-01T10:00:00.000000+00:00"
    assert from_ts(raw) == ts

def test_schema_created_once(tmp_path: Path):
    p = tmp_path / "s.db"
    with SnipDB(p) as db:
        documents.create(db, "kept")
    with SnipDB(p) as db:
        assert db.stats() == {"snips": 1, "terms": 1, "attachments": 0}

def test_reader_opens_while_writer_holds_lock(tmp_path: Path):
    p = tmp_path / "s.db"
    with SnipDB(p) as db:
        documents.create(db, "the quick brown fox")

    writer = sqlite3.connect(p, isolation_level=None)
    try:
        writer.execute("BEGIN IMMEDIATE")
        writer.execute("UPDATE snip SET name = 'pending'")
        reader = SnipDB(p)
        try:
            (s,) = documents.list_snips(reader)
            assert s.name == "the quick brown fox"
            assert [r.name for r in search(reader, "fox")] == ["the quick brown fox"]
        finally:
            reader.close()
    finally:
        writer.execute("ROLLBACK")
        writer.close()
