from __future__ import annotations
import uuid
from typing import Iterable, TypeVar
from .errors import Ambiguous, NotFound

class _Id(str):
    """Identifiant UUID typé (forme texte canonique, minuscules)."""
    kind = "id"

    def __new__(cls, value: str | uuid.UUID):
        return super().__new__(cls, str(uuid.UUID(str(value))))

    @classmethod
    def new(cls):
        return cls(uuid.uuid4())

    def short(self) -> str:
        # premier segment, comme dans `ls`
        return self.split("-", 1)[0]

class DocumentId(_Id):
    kind = "snip"

class AttachmentId(_Id):
    kind = "attachment"

T = TypeVar("T", bound=str)

def resolve(fragment: str, namespace: Iterable[T], *, kind: str = "id") -> T:
    """Résout un préfixe (sensible à la casse) vers un unique identifiant.

    - 1 correspondance  -> l'identifiant
    - 0 correspondance  -> NotFound
    - 2+ correspondances -> Ambiguous avec la liste triée des candidats

    Le fragment vide correspond à tout l'espace de noms.
    """
    matches = sorted({i for i in namespace if i.startswith(fragment)})
    if not matches:
        raise NotFound(kind, fragment)
    if len(matches) > 1:
        raise Ambiguous(kind, fragment, matches)
    return matches[0]
