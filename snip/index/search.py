from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..errors import EmptyQuery
from ..ids import DocumentId
from ..store.db import SnipDB, from_ts
from ..store.documents import get as get_snip
from ..text import Stemmer, query_terms as _query_terms
from .context import DEFAULT_WINDOW, Context, extract_context, match_positions

@dataclass
class Hit:
    uuid: DocumentId
    score: float
    matches: Dict[str, int]
    word_count: int

@dataclass
class SearchResult:
    uuid: DocumentId
    name: str
    timestamp: datetime
    score: float
    matches: Dict[str, int]
    word_count: int
    contexts: List[Context] = field(default_factory=list)

def score(matches: Dict[str, int], word_count: int) -> float:
    """Fréquence relative des termes de la requête: sum(tf) / nombre de mots."""
    if word_count <= 0:
        return 0.0
    return sum(matches.values()) / word_count

def score_documents(db: SnipDB, query_terms: Iterable[str]) -> List[Hit]:
    """Classe les snips contenant au moins un terme de la requête.

    Tri: score décroissant, puis ordre de création, puis uuid.
    """
    terms = sorted(set(query_terms))
    if not terms:
        return []
    marks = ",".join("?" * len(terms))
    rows = db.query(
        f"SELECT i.snip_uuid, i.term, i.count, s.word_count, s.timestamp, s.rowid "
        f"FROM snip_index i JOIN snip s ON s.uuid = i.snip_uuid "
        f"WHERE i.term IN ({marks})",
        tuple(terms),
    )
    by_doc: Dict[str, dict] = {}
    for uuid, term, n, wc, ts, rowid in rows:
        d = by_doc.setdefault(uuid, {"matches": {}, "wc": wc, "order": (from_ts(ts), rowid)})
        d["matches"][term] = n
    hits = [
        (d["order"], Hit(DocumentId(uuid), score(d["matches"], d["wc"]), dict(sorted(d["matches"].items())), d["wc"]))
        for uuid, d in by_doc.items()
    ]
    hits = [h for h in hits if h[1].score > 0]
    hits.sort(key=lambda h: (-h[1].score, h[0], h[1].uuid))
    return [h for _, h in hits]

def search(
    db: SnipDB,
    query: str,
    *,
    window: int = DEFAULT_WINDOW,
    limit: Optional[int] = None,
    stemmer: Optional[Stemmer] = None,
) -> List[SearchResult]:
    """Recherche plein texte: normalisation, score, puis extraits de contexte."""
    terms = _query_terms(query, stemmer)
    if not terms:
        raise EmptyQuery(query)
    hits = score_documents(db, terms)
    if limit is not None:
        hits = hits[:max(0, limit)]
    out: List[SearchResult] = []
    for h in hits:
        s = get_snip(db, h.uuid)
        ctx = extract_context(s.text, match_positions(s.text, terms, stemmer), window)
        out.append(SearchResult(h.uuid, s.name, s.timestamp, h.score, h.matches, h.word_count, ctx))
    return out
