from __future__ import annotations
from dataclasses import dataclass, asdict
from hashlib import sha256
import hmac, json, time
from pathlib import Path
from typing import Optional

from ..config import Settings

GENESIS = "0" * 64

@dataclass
class JournalEntry:
    ts: str
    op: str
    target: str
    data: dict
    prev_hash: str
    hash: str
    sig: Optional[str] = None  # HMAC hex

def _digest(base: dict) -> str:
    raw = json.dumps(base, separators=(",", ":"), ensure_ascii=False, sort_keys=True)
    return sha256(raw.encode("utf-8")).hexdigest()

def _sign(secret: str, digest: str) -> str:
    return hmac.new(secret.encode("utf-8"), digest.encode("utf-8"), sha256).hexdigest()

class ChainLogger:
    """Journal JSONL des écritures (add, attach, rm), chaîné par SHA-256, signé HMAC si secret."""
    def __init__(self, path: str | Path, *, secret: str = "") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.secret = secret or ""

    def _last_hash(self) -> str:
        if not self.path.exists():
            return GENESIS
        last = None
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    last = line
        if not last:
            return GENESIS
        try:
            return json.loads(last).get("hash", GENESIS)
        except json.JSONDecodeError:
            return GENESIS

    def record(self, op: str, target: str, data: dict | None = None) -> JournalEntry:
        base = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "op": op, "target": str(target), "data": data or {},
            "prev_hash": self._last_hash(),
        }
        digest = _digest(base)
        sig = _sign(self.secret, digest) if self.secret else None
        entry = JournalEntry(base["ts"], op, base["target"], base["data"], base["prev_hash"], digest, sig)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")
        return entry

    @staticmethod
    def verify(path: str | Path, *, secret: str = "") -> bool:
        """Vérifie la chaîne et la signature (si secret fourni)."""
        p = Path(path)
        if not p.exists():
            return True
        prev = GENESIS
        for line in p.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
                base = {k: obj[k] for k in ("ts", "op", "target", "data")}
            except (json.JSONDecodeError, KeyError, TypeError):
                return False
            base["prev_hash"] = prev
            digest = _digest(base)
            if digest != obj.get("hash"):
                return False
            if secret and _sign(secret, digest) != obj.get("sig"):
                return False
            prev = digest
        return True

def journal_for(settings: Settings) -> ChainLogger | None:
    if not settings.general.journal_enabled:
        return None
    return ChainLogger(settings.general.journal_path, secret=settings.general.chain_secret)
