from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..text import Stemmer, normalize, split_words

DEFAULT_WINDOW = 5

@dataclass(frozen=True)
class Context:
    start: int
    end: int
    fragment: str

def match_positions(text: str, query_terms: Iterable[str], stemmer: Optional[Stemmer] = None) -> List[int]:
    wanted = set(query_terms)
    return [t.position for t in normalize(text, stemmer) if t.term in wanted]

def extract_context(text: str, positions: Iterable[int], window: int = DEFAULT_WINDOW) -> List[Context]:
    """Une fenêtre [pos-window, pos+window] par occurrence, bornée au texte.

    Les fenêtres qui se chevauchent ne sont pas fusionnées; le fragment est
    la sous-chaîne littérale du texte d'origine.
    """
    if window < 0:
        raise ValueError("window doit être >= 0")
    words = split_words(text)
    if not words:
        return []
    last = len(words) - 1
    out: List[Context] = []
    for pos in sorted(positions):
        if pos < 0 or pos > last:
            continue
        start = max(0, pos - window)
        end = min(last, pos + window)
        out.append(Context(start, end, text[words[start].start:words[end].end]))
    return out
