from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

from ..errors import NotFound, StorageFailure
from ..ids import AttachmentId, DocumentId, resolve
from .db import SnipDB, from_ts, now, to_ts

@dataclass
class Attachment:
    uuid: AttachmentId
    snip_uuid: DocumentId
    timestamp: datetime
    name: str
    size: int
    data: bytes

def attach(db: SnipDB, snip_uuid: str, data: bytes, name: str) -> AttachmentId:
    """Stocke `data` comme pièce jointe du snip `snip_uuid` (qui doit exister)."""
    aid = AttachmentId.new()
    with db.transaction() as cur:
        cur.execute("SELECT 1 FROM snip WHERE uuid = ?", (str(snip_uuid),))
        if cur.fetchone() is None:
            raise NotFound(DocumentId.kind, str(snip_uuid))
        cur.execute(
            "INSERT INTO snip_attachment(uuid, snip_uuid, timestamp, name, size, data) VALUES (?, ?, ?, ?, ?, ?)",
            (aid, str(snip_uuid), to_ts(now()), name, len(data), bytes(data)),
        )
    return aid

def attach_file(db: SnipDB, snip_uuid: str, path: str | Path) -> AttachmentId:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise StorageFailure(f"lecture de {p} impossible: {e}") from e
    return attach(db, snip_uuid, data, p.name)

def get_attachment(db: SnipDB, uuid: str) -> Attachment:
    rows = db.query(
        "SELECT uuid, snip_uuid, timestamp, name, size, data FROM snip_attachment WHERE uuid = ?",
        (str(uuid),),
    )
    if not rows:
        raise NotFound(AttachmentId.kind, str(uuid))
    a, s, ts, name, size, data = rows[0]
    return Attachment(AttachmentId(a), DocumentId(s), from_ts(ts), name, int(size), bytes(data))

def read(db: SnipDB, uuid: str) -> Tuple[bytes, str]:
    a = get_attachment(db, uuid)
    return a.data, a.name

def list_for(db: SnipDB, snip_uuid: str) -> List[Tuple[AttachmentId, int, str]]:
    rows = db.query(
        "SELECT uuid, size, name FROM snip_attachment WHERE snip_uuid = ? ORDER BY timestamp, rowid",
        (str(snip_uuid),),
    )
    return [(AttachmentId(u), int(n), name) for u, n, name in rows]

def list_all(db: SnipDB) -> List[Tuple[AttachmentId, DocumentId, int, str]]:
    rows = db.query("SELECT uuid, snip_uuid, size, name FROM snip_attachment ORDER BY timestamp, rowid")
    return [(AttachmentId(u), DocumentId(s), int(n), name) for u, s, n, name in rows]

def remove(db: SnipDB, uuid: str) -> None:
    with db.transaction() as cur:
        cur.execute("DELETE FROM snip_attachment WHERE uuid = ?", (str(uuid),))
        if cur.rowcount != 1:
            raise NotFound(AttachmentId.kind, str(uuid))

def resolve_attachment(db: SnipDB, fragment: str) -> AttachmentId:
    rows = db.query("SELECT uuid FROM snip_attachment WHERE substr(uuid, 1, ?) = ?", (len(fragment), fragment))
    return resolve(fragment, (AttachmentId(r[0]) for r in rows), kind=AttachmentId.kind)
