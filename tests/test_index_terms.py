from snip.index.terms import count_terms, rebuild_index, terms_for
from snip.store import documents
from snip.text import normalize

def test_count_terms():
    c = count_terms(normalize("birds and more birds"))
    assert c == {"bird": 2, "and": 1, "more": 1}

def test_index_entries_per_distinct_term(db):
    s = documents.create(db, "Running runners run; nature natural")
    freqs = terms_for(db, s.uuid)
    assert freqs["run"] == 2
    assert freqs["natur"] == 2
    assert sum(freqs.values()) == 5

class _Upper:
    def stem(self, word: str) -> str:
        return word.upper()

def test_rebuild_index(db):
    a = documents.create(db, "alpha beta beta")
    documents.create(db, "gamma")
    assert rebuild_index(db, stemmer=_Upper()) == 2
    assert terms_for(db, a.uuid) == {"ALPHA": 1, "BETA": 2}
    assert documents.get(db, a.uuid).word_count == 3
    # retour au stemmer par défaut
    rebuild_index(db)
    assert terms_for(db, a.uuid) == {"alpha": 1, "beta": 2}
