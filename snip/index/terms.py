from __future__ import annotations
import sqlite3
from collections import Counter
from typing import Iterable, Optional

from ..text import Stemmer, Term, normalize
from ..store.db import SnipDB

def count_terms(terms: Iterable[Term | str]) -> Counter[str]:
    return Counter(t.term if isinstance(t, Term) else t for t in terms)

def index_document(cur: sqlite3.Cursor | sqlite3.Connection, snip_uuid: str, terms: Iterable[Term | str]) -> int:
    """Écrit une entrée (snip, terme, fréquence) par terme distinct.

    Ne valide rien: doit être appelé dans la transaction qui crée le
    document, pour que document et index soient écrits ensemble.
    Retourne le nombre total de mots (somme des fréquences).
    """
    counts = count_terms(terms)
    cur.executemany(
        "INSERT INTO snip_index(snip_uuid, term, count) VALUES (?, ?, ?)",
        [(str(snip_uuid), term, n) for term, n in counts.items()],
    )
    return sum(counts.values())

def terms_for(db: SnipDB, snip_uuid: str) -> dict[str, int]:
    rows = db.query("SELECT term, count FROM snip_index WHERE snip_uuid = ? ORDER BY term", (str(snip_uuid),))
    return {t: n for t, n in rows}

def rebuild_index(db: SnipDB, stemmer: Optional[Stemmer] = None) -> int:
    """Recalcule l'index et les word_count de tous les snips (ex: après changement de stemmer)."""
    with db.transaction() as cur:
        cur.execute("SELECT uuid, data FROM snip")
        rows = cur.fetchall()
        cur.execute("DELETE FROM snip_index")
        for uuid, data in rows:
            total = index_document(cur, uuid, normalize(data, stemmer))
            cur.execute("UPDATE snip SET word_count = ? WHERE uuid = ?", (total, uuid))
    return len(rows)
