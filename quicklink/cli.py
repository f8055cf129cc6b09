from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import yaml

from . import __version__
from .config import Settings, load_settings
from .kv_store import SQLiteKeyValueStore
from .log import LogConfig, get_logger, setup_logging
from .opener import open_link
from .persistence import FailingPersistence, LinkPersistence
from .store import LinkStore
from .url_norm import normalize_url_input

log = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="quicklink",
        description="Keep a short list of links you open often.",
    )
    p.add_argument("-V", "--version", action="version", version=f"quicklink {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (optional). Env vars override defaults.")
    p.add_argument("--db", default=None, help="SQLite file holding the link list (overrides env/config).")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")
    p.add_argument(
        "--simulate-save-failure",
        action="store_true",
        help="Debug: make every save fail to exercise rollback. Nothing is written.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="Show saved links.")

    add = sub.add_parser("add", help="Add a link.")
    add.add_argument("url", help="URL, e.g. https://example.com or example.com")
    add.add_argument("--title", default="", help="Optional title; the URL is shown when omitted.")

    opn = sub.add_parser("open", help="Open a link in the default browser.")
    opn.add_argument("ref", help="Row number (from `list`) or link id.")

    rm = sub.add_parser("remove", help="Delete one or more links.")
    rm.add_argument("refs", nargs="+", help="Row numbers (from `list`) or link ids.")

    args = p.parse_args(argv)
    try:
        cfg = load_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        log.error("Could not load config %s: %s", args.config, e)
        return 2
    if args.db:
        cfg.db_path = args.db
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True
    if args.simulate_save_failure:
        cfg.simulate_save_failure = True
    setup_logging(LogConfig(level=cfg.log_level, no_color=cfg.no_color))

    store = build_store(cfg)
    if args.cmd == "list":
        return _cmd_list(store)
    if args.cmd == "add":
        return _cmd_add(store, args.url, args.title)
    if args.cmd == "open":
        return _cmd_open(store, args.ref)
    if args.cmd == "remove":
        return _cmd_remove(store, args.refs)
    return 2


def build_store(cfg: Settings) -> LinkStore:
    persistence = LinkPersistence(SQLiteKeyValueStore(cfg.db_path), key=cfg.storage_key)
    if cfg.simulate_save_failure:
        log.warning("Save failure simulation is on; changes will not be kept.")
        persistence = FailingPersistence(persistence)
    return LinkStore(
        persistence,
        seed=cfg.seed,
        seed_title=cfg.seed_title,
        seed_url=cfg.seed_url,
    )


def _cmd_list(store: LinkStore) -> int:
    if not store.links:
        print("No links yet. Add your first link with `quicklink add URL`.")
        return 0
    for n, e in enumerate(store.links, start=1):
        print(f"{n:>3}. {e.display_title}")
        if e.title:
            print(f"     {e.url_string}")
    return 0


def _cmd_add(store: LinkStore, url: str, title: str) -> int:
    if normalize_url_input(url) is None:
        log.error("Not a valid URL: %r", url)
        return 2
    entry = store.add_link(title, url)
    if entry is None:
        return _report_error(store)
    print(f"Added {entry.display_title} ({entry.url_string})")
    return 0


def _cmd_open(store: LinkStore, ref: str) -> int:
    idx = _resolve_ref(store, ref)
    if idx is None:
        log.error("No link matches %r", ref)
        return 2
    return 0 if open_link(store.links[idx]) else 1


def _cmd_remove(store: LinkStore, refs: List[str]) -> int:
    indices = set()
    for ref in refs:
        idx = _resolve_ref(store, ref)
        if idx is None:
            log.error("No link matches %r", ref)
            return 2
        indices.add(idx)
    removed = [store.links[i] for i in sorted(indices)]
    if not store.remove_at_indices(indices):
        return _report_error(store)
    for e in removed:
        print(f"Removed {e.display_title}")
    return 0


def _resolve_ref(store: LinkStore, ref: str) -> Optional[int]:
    ref = ref.strip()
    if ref.isdigit():
        n = int(ref)
        return n - 1 if 1 <= n <= len(store.links) else None
    for i, e in enumerate(store.links):
        if e.id.lower() == ref.lower():
            return i
    return None


def _report_error(store: LinkStore) -> int:
    print(store.error_message or "Could not save links.", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
