from pathlib import Path
from snip.config import load_settings
from snip.tools.logs import log_event, tail

def test_log_event_writes_line(home: Path):
    s = load_settings()
    p = log_event(s, "unit-test message")
    assert p.exists() and p.name == "snip.log"
    data = p.read_text(encoding="utf-8").splitlines()[-1]
    assert "unit-test message" in data and "T" in data  # ISO timestamp
    assert "| info |" in data

def test_log_event_single_line_and_tail(home: Path):
    s = load_settings()
    assert tail(s) == []
    log_event(s, "multi\nline", level="error")
    log_event(s, "second")
    lines = tail(s, limit=2)
    assert len(lines) == 2
    assert lines[0].endswith("| error | multi line")
    assert tail(s, limit=1)[0].endswith("| info | second")
