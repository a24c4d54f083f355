import pytest
from snip.index.context import Context, extract_context, match_positions

TEXT = "one two three four five six seven"

def test_windows_are_clamped():
    out = extract_context(TEXT, [0, 6], 2)
    assert out == [Context(0, 2, "one two three"), Context(4, 6, "five six seven")]

def test_overlapping_windows_not_merged():
    out = extract_context(TEXT, [3, 2], 1)
    assert [(c.start, c.end) for c in out] == [(1, 3), (2, 4)]

def test_fragment_is_original_text():
    text = "Birds, flying (high) over the NATURE reserve!"
    pos = match_positions(text, {"natur"})
    assert pos == [5]
    (c,) = extract_context(text, pos, 2)
    assert c.fragment == "over the NATURE reserve"

def test_bounds_property():
    words = 7
    for w in range(0, 10):
        for c in extract_context(TEXT, range(words), w):
            assert 0 <= c.start <= c.end <= words - 1

def test_edge_cases():
    assert extract_context("", [0], 3) == []
    assert extract_context(TEXT, [42, -1], 1) == []
    with pytest.raises(ValueError):
        extract_context(TEXT, [0], -1)
