import uuid
import pytest
from snip.errors import Ambiguous, NotFound
from snip.ids import AttachmentId, DocumentId, resolve

A = DocumentId("ab12c0de-0000-4000-8000-000000000001")
B = DocumentId("ab34c0de-0000-4000-8000-000000000002")
C = DocumentId("ff000000-0000-4000-8000-000000000003")

def test_typed_ids_are_distinct_kinds():
    d = DocumentId.new()
    a = AttachmentId(str(d))
    assert str(a) == str(d)
    assert type(a) is AttachmentId and type(d) is DocumentId
    assert uuid.UUID(d).version == 4

def test_invalid_id_rejected():
    with pytest.raises(ValueError):
        DocumentId("not-a-uuid")

def test_resolve_unique_prefix():
    assert resolve("ab12", [A, B, C]) == A
    assert resolve("f", [A, B, C]) == C

def test_resolve_ambiguous_lists_candidates():
    with pytest.raises(Ambiguous) as ei:
        resolve("ab", [B, A, C], kind="snip")
    assert ei.value.candidates == [A, B]
    assert ei.value.kind == "snip"

def test_resolve_not_found():
    with pytest.raises(NotFound):
        resolve("00", [A, B, C])
    with pytest.raises(NotFound):
        resolve("", [])

def test_resolve_is_case_sensitive():
    with pytest.raises(NotFound):
        resolve("AB12", [A, B])

def test_resolve_full_id_is_idempotent():
    for ns in ([A], [A, B], [A, B, C]):
        assert resolve(str(A), ns) == A

def test_resolve_empty_fragment():
    with pytest.raises(Ambiguous) as ei:
        resolve("", [A, B, C])
    assert ei.value.candidates == [A, B, C]
    assert resolve("", [C]) == C
