from __future__ import annotations
import mimetypes
from urllib.parse import quote
from dataclasses import asdict
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from ..errors import Ambiguous, EmptyQuery, NotFound, SnipError
from ..index.context import DEFAULT_WINDOW
from ..index.search import search
from ..store import attachments, documents
from ..store.db import SnipDB

def _http_error(e: SnipError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, Ambiguous):
        return HTTPException(status_code=409, detail={"message": str(e), "candidates": e.candidates})
    if isinstance(e, EmptyQuery):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))

def _snip_summary(s: documents.Snip) -> dict:
    return {"uuid": str(s.uuid), "name": s.name, "timestamp": s.timestamp.isoformat(), "word_count": s.word_count}

def create_app(db_path: str) -> FastAPI:
    """API locale en lecture seule au-dessus d'une base snip."""
    app = FastAPI(title="snip", docs_url=None, redoc_url=None)
    app.state.db_path = db_path

    def _with_db() -> SnipDB:
        try:
            return SnipDB(app.state.db_path)
        except SnipError as e:
            raise _http_error(e)

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/stats")
    def stats() -> dict:
        with _with_db() as db:
            return db.stats()

    @app.get("/api/snips")
    def list_snips() -> list[dict]:
        with _with_db() as db:
            return [_snip_summary(s) for s in documents.list_snips(db)]

    @app.get("/api/snips/{fragment}")
    def get_snip(fragment: str) -> dict:
        with _with_db() as db:
            try:
                s = documents.get(db, documents.resolve_snip(db, fragment))
                atts = attachments.list_for(db, s.uuid)
            except SnipError as e:
                raise _http_error(e)
        out = _snip_summary(s)
        out["text"] = s.text
        out["attachments"] = [{"uuid": str(a), "size": n, "name": name} for a, n, name in atts]
        return out

    @app.get("/api/search")
    def api_search(
        q: str = Query(...),
        limit: int | None = Query(default=None, ge=0),
        window: int = Query(default=DEFAULT_WINDOW, ge=0),
    ) -> list[dict]:
        with _with_db() as db:
            try:
                results = search(db, q, window=window, limit=limit)
            except SnipError as e:
                raise _http_error(e)
        return [
            {
                "uuid": str(r.uuid),
                "name": r.name,
                "timestamp": r.timestamp.isoformat(),
                "score": r.score,
                "matches": r.matches,
                "word_count": r.word_count,
                "contexts": [asdict(c) for c in r.contexts],
            }
            for r in results
        ]

    @app.get("/api/attachments/{fragment}")
    def download(fragment: str) -> Response:
        with _with_db() as db:
            try:
                data, name = attachments.read(db, attachments.resolve_attachment(db, fragment))
            except SnipError as e:
                raise _http_error(e)
        mime, _ = mimetypes.guess_type(name)
        return Response(
            content=data,
            media_type=mime or "application/octet-stream",
            headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(name)}"},
        )

    return app
