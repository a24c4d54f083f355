from __future__ import annotations
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Protocol

from nltk.stem.snowball import SnowballStemmer as _NltkSnowball

# mots = suites alphanumériques (unicode), tout le reste sépare
WORD_RE = re.compile(r"[^\W_]+")

class Stemmer(Protocol):
    def stem(self, word: str) -> str: ...

class SnowballStemmer:
    """Stemmer Snowball anglais (Porter2) fourni par nltk."""
    def __init__(self, language: str = "english") -> None:
        self.language = language
        self._impl = _NltkSnowball(language)

    def stem(self, word: str) -> str:
        return self._impl.stem(word)

@lru_cache(maxsize=1)
def default_stemmer() -> SnowballStemmer:
    return SnowballStemmer()

@dataclass(frozen=True)
class Word:
    text: str
    start: int
    end: int
    position: int

@dataclass(frozen=True)
class Term:
    term: str
    position: int

def split_words(text: str) -> List[Word]:
    return [Word(m.group(0), m.start(), m.end(), i) for i, m in enumerate(WORD_RE.finditer(text or ""))]

def stem_word(word: str, stemmer: Optional[Stemmer] = None) -> str:
    stemmer = stemmer or default_stemmer()
    return stemmer.stem(word.lower())

def normalize(text: str, stemmer: Optional[Stemmer] = None) -> List[Term]:
    """Découpe, met en minuscules et racinise `text`.

    La position est l'index du mot dans la séquence d'origine (avant
    filtrage), utilisée ensuite pour les extraits de contexte.
    """
    stemmer = stemmer or default_stemmer()
    out: List[Term] = []
    for w in split_words(text):
        t = stemmer.stem(w.text.lower())
        if t:
            out.append(Term(t, w.position))
    return out

def query_terms(query: str, stemmer: Optional[Stemmer] = None) -> set[str]:
    return {t.term for t in normalize(query, stemmer)}
