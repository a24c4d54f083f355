from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from ..config import Settings

LOG_FILE = "snip.log"

def log_event(settings: Settings, message: str, *, level: str = "info") -> Path:
    """Ajoute une ligne `ts | level | message` au journal texte de snip."""
    log_dir = Path(settings.general.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / LOG_FILE
    ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    line = " ".join(message.split())  # une entrée = une ligne
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{ts} | {level} | {line}\n")
    return path

def tail(settings: Settings, limit: int = 20) -> list[str]:
    path = Path(settings.general.log_dir) / LOG_FILE
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()[-limit:]
