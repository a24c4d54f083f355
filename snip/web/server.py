from __future__ import annotations
import argparse
import uvicorn
from ..config import load_settings
from .app import create_app

def main() -> None:
    parser = argparse.ArgumentParser(description="snip: API locale (FastAPI)")
    parser.add_argument("--config", type=str, default=None, help="Fichier snip.toml ou dossier le contenant")
    parser.add_argument("--db", type=str, default=None, help="Chemin base SQLite (défaut: storage.db_path)")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Hôte (par défaut: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8765, help="Port (défaut: 8765)")
    args = parser.parse_args()

    settings = load_settings(args.config, overrides={"db_path": args.db})
    app = create_app(db_path=settings.storage.db_path)
    uvicorn.run(app, host=args.host, port=int(args.port), log_level="info")

if __name__ == "__main__":
    main()
