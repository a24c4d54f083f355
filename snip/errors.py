from __future__ import annotations
from typing import Sequence

class SnipError(Exception):
    """Base pour les erreurs remontées à l'appelant."""

class NotFound(SnipError):
    """Aucun identifiant ne correspond au fragment."""
    def __init__(self, kind: str, fragment: str) -> None:
        self.kind = kind
        self.fragment = fragment
        super().__init__(f"{kind} introuvable: {fragment!r}")

class Ambiguous(SnipError):
    """Le fragment correspond à plusieurs identifiants (voir .candidates)."""
    def __init__(self, kind: str, fragment: str, candidates: Sequence[str]) -> None:
        self.kind = kind
        self.fragment = fragment
        self.candidates = list(candidates)
        super().__init__(f"{kind} ambigu: {fragment!r} correspond à {len(self.candidates)} identifiants")

class StorageFailure(SnipError):
    """Erreur de lecture/écriture de la base SQLite."""

class EmptyQuery(SnipError):
    """Requête sans aucun terme exploitable après normalisation."""
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"requête vide: {query!r}")
