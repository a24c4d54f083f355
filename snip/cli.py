from __future__ import annotations
import argparse, sys, tomllib
from pathlib import Path
from . import __version__
from .config import Settings, load_settings
from .errors import Ambiguous, SnipError
from .index.search import search
from .index.terms import rebuild_index
from .store import attachments, documents
from .store.db import SnipDB
from .text import split_words, stem_word
from .tools.journal import ChainLogger, journal_for
from .tools.logs import log_event, tail

# === Entrée ===================================================================
def _read_input(args) -> str:
    if getattr(args, "file", None):
        return Path(args.file).read_text(encoding="utf-8")
    if getattr(args, "text", None):
        return " ".join(args.text)
    return sys.stdin.read()

def _journal(settings: Settings, op: str, target: str, data: dict | None = None) -> None:
    j = journal_for(settings)
    if j is not None:
        j.record(op, target, data)

# === Commandes ================================================================
def cmd_add(db: SnipDB, s: Settings, args) -> int:
    text = _read_input(args)
    if not text.strip():
        print("ERR: texte vide", file=sys.stderr)
        return 1
    snip = documents.create(db, text, name=args.name)
    print(snip.uuid)
    log_event(s, f"add {snip.uuid} words={snip.word_count}")
    _journal(s, "add", snip.uuid, {"name": snip.name, "words": snip.word_count})
    return 0

def cmd_ls(db: SnipDB, s: Settings, args) -> int:
    for snip in documents.list_snips(db):
        print(f"{snip.uuid.short()} {snip.timestamp.isoformat()} {snip.name}")
    return 0

def cmd_get(db: SnipDB, s: Settings, args) -> int:
    if args.id is None:
        snip = documents.first(db)
    else:
        snip = documents.get(db, documents.resolve_snip(db, args.id))
    print(f"uuid: {snip.uuid}")
    print(f"name: {snip.name}")
    print(f"timestamp: {snip.timestamp.isoformat()}")
    print(f"words: {snip.word_count}")
    for aid, size, name in attachments.list_for(db, snip.uuid):
        print(f"attachment: {aid} {size} {name}")
    print()
    print(snip.text)
    return 0

def cmd_search(db: SnipDB, s: Settings, args) -> int:
    window = args.window if args.window is not None else s.search.window
    limit = args.limit if args.limit is not None else s.search.limit
    results = search(db, " ".join(args.query), window=window, limit=limit)
    for r in results:
        freqs = " ".join(f"{t}={n}" for t, n in r.matches.items())
        print(f"{r.uuid.short()} {r.score:.4f} [{freqs}] /{r.word_count} {r.name}")
        for c in r.contexts:
            print(f"    [{c.start}-{c.end}] {c.fragment}")
    return 0

def cmd_attach(db: SnipDB, s: Settings, args) -> int:
    parent = documents.resolve_snip(db, args.id)
    aid = attachments.attach_file(db, parent, args.path)
    print(aid)
    log_event(s, f"attach {aid} -> {parent}")
    _journal(s, "attach", aid, {"snip": str(parent), "name": Path(args.path).name})
    return 0

def cmd_attachments(db: SnipDB, s: Settings, args) -> int:
    if args.id:
        parent = documents.resolve_snip(db, args.id)
        for aid, size, name in attachments.list_for(db, parent):
            print(f"{aid} {size} {name}")
    else:
        for aid, parent, size, name in attachments.list_all(db):
            print(f"{aid} {parent.short()} {size} {name}")
    return 0

def cmd_attachment_get(db: SnipDB, s: Settings, args) -> int:
    aid = attachments.resolve_attachment(db, args.id)
    data, name = attachments.read(db, aid)
    if args.output:
        out = Path(args.output)
    else:
        # nom de base seulement: jamais hors du dossier courant
        base = Path(name).name
        out = Path(base if base not in ("", ".", "..") else str(aid))
    out.write_bytes(data)
    print(f"{out} ({len(data)} bytes)")
    return 0

def cmd_attachment_rm(db: SnipDB, s: Settings, args) -> int:
    aid = attachments.resolve_attachment(db, args.id)
    attachments.remove(db, aid)
    print(f"removed {aid}")
    log_event(s, f"rm-attachment {aid}")
    _journal(s, "rm-attachment", aid)
    return 0

def cmd_reindex(db: SnipDB, s: Settings, args) -> int:
    n = rebuild_index(db)
    print(f"reindexed {n} snips")
    log_event(s, f"reindex {n}")
    return 0

# === Commandes sans base ======================================================
def cmd_stem(s: Settings, args) -> int:
    print(f"{args.word} -> {stem_word(args.word)}")
    return 0

def cmd_split(s: Settings, args) -> int:
    text = args.string if args.string is not None else sys.stdin.read()
    print([w.text for w in split_words(text)])
    return 0

def cmd_log(s: Settings, args) -> int:
    for line in tail(s, args.limit):
        print(line)
    return 0

def cmd_journal_verify(s: Settings, args) -> int:
    ok = ChainLogger.verify(s.general.journal_path, secret=s.general.chain_secret)
    print("journal ok" if ok else "journal CORROMPU")
    return 0 if ok else 1

NO_DB = {"stem": cmd_stem, "split": cmd_split, "log": cmd_log, "journal-verify": cmd_journal_verify}
WITH_DB = {
    "add": cmd_add,
    "ls": cmd_ls,
    "get": cmd_get,
    "search": cmd_search,
    "attach": cmd_attach,
    "attachments": cmd_attachments,
    "attachment-get": cmd_attachment_get,
    "attachment-rm": cmd_attachment_rm,
    "reindex": cmd_reindex,
}

# === Arguments ================================================================
def _argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser("snip", description="snip: notes personnelles avec recherche plein texte")
    ap.add_argument("--config", default=None, help="Fichier snip.toml ou dossier le contenant.")
    ap.add_argument("--db", default=None, help="Chemin de la base SQLite (défaut: $SNIP_DB ou ~/.snip.sqlite3).")
    ap.add_argument("--version", action="version", version=__version__)
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Ajouter un snip (texte, --file ou stdin).")
    p.add_argument("text", nargs="*", help="Texte du snip.")
    p.add_argument("--file", help="Lire le texte depuis un fichier.")
    p.add_argument("--name", default=None, help="Nom (défaut: première ligne).")

    sub.add_parser("ls", help="Lister les snips.")

    p = sub.add_parser("get", help="Afficher un snip (le premier si aucun id).")
    p.add_argument("id", nargs="?", default=None, help="Uuid ou préfixe d'uuid.")

    p = sub.add_parser("search", help="Recherche plein texte classée.")
    p.add_argument("query", nargs="+", help="Termes recherchés.")
    p.add_argument("-n", "--limit", type=int, default=None, help="Nombre maximum de résultats.")
    p.add_argument("--window", type=int, default=None, help="Mots de contexte de part et d'autre.")

    p = sub.add_parser("attach", help="Joindre un fichier à un snip.")
    p.add_argument("id", help="Uuid ou préfixe du snip.")
    p.add_argument("path", help="Fichier à joindre.")

    p = sub.add_parser("attachments", help="Lister les pièces jointes (d'un snip ou toutes).")
    p.add_argument("id", nargs="?", default=None)

    p = sub.add_parser("attachment-get", help="Extraire une pièce jointe.")
    p.add_argument("id", help="Uuid ou préfixe de la pièce jointe.")
    p.add_argument("-o", "--output", default=None, help="Fichier de sortie (défaut: nom d'origine).")

    p = sub.add_parser("attachment-rm", help="Supprimer une pièce jointe.")
    p.add_argument("id")

    sub.add_parser("reindex", help="Reconstruire l'index des termes.")

    p = sub.add_parser("stem", help="Raciniser un mot.")
    p.add_argument("word")

    p = sub.add_parser("split", help="Découper un texte en mots.")
    p.add_argument("string", nargs="?", default=None)

    p = sub.add_parser("log", help="Afficher les dernières lignes du journal texte.")
    p.add_argument("-n", "--limit", type=int, default=20)

    sub.add_parser("journal-verify", help="Vérifier le journal chaîné des écritures.")
    return ap

def build_parser() -> argparse.ArgumentParser:
    return _argparser()

# === Main =====================================================================
def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        s = load_settings(args.config, overrides={"db_path": args.db})
    except (tomllib.TOMLDecodeError, OSError) as e:
        print(f"ERR: configuration illisible: {e}", file=sys.stderr)
        return 1

    try:
        if args.command in NO_DB:
            return NO_DB[args.command](s, args)
        with SnipDB(s.storage.db_path) as db:
            return WITH_DB[args.command](db, s, args)
    except Ambiguous as e:
        print(f"ERR: {e}", file=sys.stderr)
        for c in e.candidates:
            print(f"  {c}", file=sys.stderr)
        return 1
    except (SnipError, OSError, UnicodeDecodeError) as e:
        print(f"ERR: {e}", file=sys.stderr)
        log_event(s, f"{args.command} failed: {e}", level="error")
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
