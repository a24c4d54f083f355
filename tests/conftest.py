from pathlib import Path
import pytest
from snip.store.db import SnipDB

@pytest.fixture
def db(tmp_path: Path):
    d = SnipDB(tmp_path / "snip.sqlite3")
    try:
        yield d
    finally:
        d.close()

@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    monkeypatch.setenv("HOME", str(h))
    monkeypatch.delenv("SNIP_DB", raising=False)
    monkeypatch.delenv("SNIP_CHAIN_SECRET", raising=False)
    return h
