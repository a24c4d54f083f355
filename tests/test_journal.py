import json
from pathlib import Path
from snip.tools.journal import ChainLogger

def test_journal_hmac_verify(tmp_path: Path):
    p = tmp_path / "journal.jsonl"
    j = ChainLogger(p, secret="testsecret")
    first = j.record("add", "snip-1", {"words": 3})
    second = j.record("attach", "att-1", {"snip": "snip-1"})
    assert second.prev_hash == first.hash
    assert ChainLogger.verify(p, secret="testsecret") is True
    assert ChainLogger.verify(p, secret="bad") is False

def test_journal_detects_tampering(tmp_path: Path):
    p = tmp_path / "journal.jsonl"
    j = ChainLogger(p)
    j.record("add", "a")
    j.record("add", "b")
    lines = p.read_text(encoding="utf-8").splitlines()
    obj = json.loads(lines[0])
    obj["target"] = "evil"
    lines[0] = json.dumps(obj)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert ChainLogger.verify(p) is False

def test_missing_journal_is_valid(tmp_path: Path):
    assert ChainLogger.verify(tmp_path / "none.jsonl") is True
