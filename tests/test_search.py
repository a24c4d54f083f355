from datetime import datetime, timedelta, timezone
import pytest
from snip.errors import EmptyQuery
from snip.index.search import score_documents, search
from snip.store import documents
from snip.text import query_terms

FOX = "the quick brown fox jumps over the lazy dog"

def test_fox_scenario(db):
    s = documents.create(db, FOX)
    res = search(db, "fox")
    assert len(res) == 1
    r = res[0]
    assert r.uuid == s.uuid
    assert r.matches == {"fox": 1}
    assert r.word_count == 9
    assert r.score == pytest.approx(1 / 9)
    assert search(db, "the")[0].matches == {"the": 2}

def test_every_indexed_term_finds_document(db):
    s = documents.create(db, "Birds of prey love nature reserves")
    for word in ["bird", "BIRDS", "natural", "reserve", "prey"]:
        hits = score_documents(db, query_terms(word))
        assert s.uuid in [h.uuid for h in hits]
        assert all(h.score > 0 for h in hits)

def test_absent_term_gives_empty_result(db):
    documents.create(db, FOX)
    assert search(db, "elephant") == []

def test_empty_term_set(db):
    documents.create(db, FOX)
    assert score_documents(db, set()) == []

def test_empty_query_raises(db):
    with pytest.raises(EmptyQuery):
        search(db, "  ?! ")

def test_relative_frequency_ranking(db):
    long = documents.create(db, "fox " + "filler " * 20)
    short = documents.create(db, "fox hunt")
    res = search(db, "fox")
    assert [r.uuid for r in res] == [short.uuid, long.uuid]

def test_multiple_terms_breakdown(db):
    s = documents.create(db, "cats and dogs and more dogs")
    (r,) = search(db, "dog cat bird")
    assert r.uuid == s.uuid
    assert r.matches == {"cat": 1, "dog": 2}
    assert r.score == pytest.approx(3 / 6)

def test_ties_follow_creation_order(db):
    t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    later = documents.create(db, "same words here", timestamp=t0 + timedelta(hours=1))
    earlier = documents.create(db, "same words here", timestamp=t0)
    assert [r.uuid for r in search(db, "words")] == [earlier.uuid, later.uuid]

def test_limit_and_contexts(db):
    documents.create(db, "one fox")
    documents.create(db, "the fox and another fox and a dog")
    res = search(db, "fox", limit=1, window=1)
    assert len(res) == 1
    res = search(db, "fox", window=1)
    many = [r for r in res if len(r.contexts) == 2][0]
    assert [c.fragment for c in many.contexts] == ["the fox and", "another fox and"]
