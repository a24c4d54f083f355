from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..errors import NotFound
from ..ids import DocumentId, resolve
from ..text import Stemmer, normalize
from .db import SnipDB, from_ts, now, to_ts

NAME_MAX = 60

@dataclass
class Snip:
    uuid: DocumentId
    name: str
    timestamp: datetime
    text: str
    word_count: int = 0

def derive_name(text: str) -> str:
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line[:NAME_MAX]
    return ""

def _from_row(row: tuple) -> Snip:
    uuid, ts, name, data, wc = row
    return Snip(DocumentId(uuid), name, from_ts(ts), data, int(wc))

_COLS = "uuid, timestamp, name, data, word_count"

def create(
    db: SnipDB,
    text: str,
    *,
    name: str | None = None,
    timestamp: datetime | None = None,
    stemmer: Optional[Stemmer] = None,
) -> Snip:
    """Ajoute un snip et ses entrées d'index dans une seule transaction."""
    from ..index.terms import index_document

    s = Snip(
        uuid=DocumentId.new(),
        name=name if name is not None else derive_name(text),
        timestamp=timestamp or now(),
        text=text,
    )
    terms = normalize(text, stemmer)
    with db.transaction() as cur:
        cur.execute(
            "INSERT INTO snip(uuid, timestamp, name, data, word_count) VALUES (?, ?, ?, ?, 0)",
            (s.uuid, to_ts(s.timestamp), s.name, s.text),
        )
        s.word_count = index_document(cur, s.uuid, terms)
        cur.execute("UPDATE snip SET word_count = ? WHERE uuid = ?", (s.word_count, s.uuid))
    return s

def get(db: SnipDB, uuid: str) -> Snip:
    rows = db.query(f"SELECT {_COLS} FROM snip WHERE uuid = ?", (str(uuid),))
    if not rows:
        raise NotFound(DocumentId.kind, str(uuid))
    return _from_row(rows[0])

def first(db: SnipDB) -> Snip:
    rows = db.query(f"SELECT {_COLS} FROM snip ORDER BY timestamp, rowid LIMIT 1")
    if not rows:
        raise NotFound(DocumentId.kind, "")
    return _from_row(rows[0])

def list_snips(db: SnipDB) -> List[Snip]:
    return [_from_row(r) for r in db.query(f"SELECT {_COLS} FROM snip ORDER BY timestamp, rowid")]

def count(db: SnipDB) -> int:
    return db.query("SELECT COUNT(*) FROM snip")[0][0]

def resolve_snip(db: SnipDB, fragment: str) -> DocumentId:
    """Résout un uuid abrégé via un scan par préfixe sur la table snip."""
    rows = db.query("SELECT uuid FROM snip WHERE substr(uuid, 1, ?) = ?", (len(fragment), fragment))
    return resolve(fragment, (DocumentId(r[0]) for r in rows), kind=DocumentId.kind)
