from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
import tomllib, os

DEFAULT_DB_FILE = ".snip.sqlite3"
CONFIG_FILE = "snip.toml"

def _default_db_path() -> str:
    return str(Path.home() / DEFAULT_DB_FILE)

def _default_dir() -> Path:
    return Path.home() / ".config" / "snip"

@dataclass
class General:
    log_dir: str = ""
    journal_enabled: bool = False
    journal_path: str = ""
    chain_secret: str = ""

@dataclass
class Storage:
    db_path: str = ""

@dataclass
class Search:
    window: int = 5
    limit: int = 20

@dataclass
class Settings:
    general: General
    storage: Storage
    search: Search

def _load_toml_if_exists(path: Path) -> dict:
    if path.is_file():
        with path.open("rb") as f:
            return tomllib.load(f)
    return {}

def _filter_for_dataclass(cls, data: dict) -> dict:
    """Ne garde que les clés connues du dataclass (évite TypeError sur clés en trop)."""
    allowed = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in allowed}

def load_settings(config: str | None = None, overrides: dict | None = None) -> Settings:
    """
    Cherche la configuration dans:
      - `config` si c'est un fichier TOML
      - `config`/snip.toml si c'est un dossier
      - ~/.config/snip/snip.toml par défaut
    Puis applique l'environnement (SNIP_DB, SNIP_CHAIN_SECRET) et `overrides`.
    """
    config_path = Path(config) if config else _default_dir()
    raw = _load_toml_if_exists(config_path if config_path.suffix == ".toml" else config_path / CONFIG_FILE)

    g = General(**_filter_for_dataclass(General, raw.get("general")))
    st = Storage(**_filter_for_dataclass(Storage, raw.get("storage")))
    se = Search(**_filter_for_dataclass(Search, raw.get("search")))

    base_dir = _default_dir()
    if not st.db_path:
        st.db_path = _default_db_path()
    if not g.log_dir:
        g.log_dir = str(base_dir / "logs")
    if not g.journal_path:
        g.journal_path = str(base_dir / "journal.jsonl")

    # Environnement prioritaire sur le TOML
    env_db = os.environ.get("SNIP_DB")
    if env_db:
        st.db_path = env_db
    env_secret = os.environ.get("SNIP_CHAIN_SECRET")
    if env_secret:
        g.chain_secret = env_secret

    # Overrides (CLI): appliqués à la première section qui connaît la clé
    if overrides:
        for k, v in overrides.items():
            if v is None:
                continue
            for section in (g, st, se):
                if hasattr(section, k):
                    setattr(section, k, v)
                    break

    return Settings(general=g, storage=st, search=se)
