#!/usr/bin/env python3
"""
DoubleCheck query tool

Runs one Action API query through the throttled client and prints the
result as JSON.

Usage:
    python scripts/query.py pageinfo "Main Page" "Python (programming language)"
    python scripts/query.py revisions "Main Page" --start 1234567 --limit 10
    python scripts/query.py recent --direction older --bad --limit 20
    python scripts/query.py latest --limit 5
    python scripts/query.py latest-ores --limit 5
    python scripts/query.py last-revisions "Main Page" --continue "<rvcontinue>"
    python scripts/query.py diff 1234567 [--lines]
    python scripts/query.py category "Category:Physics"
"""

import argparse
import json
import logging
import sys
import threading
from pathlib import Path

# Add project root to path for the doublecheck package
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

from doublecheck.config import load_settings
from doublecheck.diff_utils import changed_lines
from doublecheck.errors import Cancelled, DoubleCheckError
from doublecheck.logging_config import setup_logging
from doublecheck.models import RecentChangesQuery

CONFIG_PATH = PROJECT_ROOT / "config.json"


def dump(value):
    json.dump(value, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def run_category(client, wiki: str, title: str):
    """List a category, stopping cleanly on Ctrl-C."""
    cancel = threading.Event()
    result = {}

    def worker():
        try:
            result["pages"] = client.get_category_children(wiki, title, cancel=cancel)
        except Cancelled as e:
            result["pages"] = e.partial
            result["cancelled"] = True
        except Exception as e:
            # re-raised below on the main thread
            result["error"] = e

    thread = threading.Thread(target=worker)
    thread.start()
    try:
        while thread.is_alive():
            thread.join(0.2)
    except KeyboardInterrupt:
        client.logger.warning("Interrupted, finishing the current batch...")
        cancel.set()
        thread.join()

    if "error" in result:
        raise result["error"]
    dump({
        "cancelled": result.get("cancelled", False),
        "pages": [p.to_dict() for p in result["pages"]],
    })


def build_parser(default_wiki: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the MediaWiki Action API for edit review")
    parser.add_argument("--wiki", default=default_wiki, help=f"Wiki key (default: {default_wiki})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("pageinfo", help="Page info for up to 50 titles")
    p.add_argument("titles", nargs="+")

    p = sub.add_parser("revisions", help="Revision ids of a page, newest first")
    p.add_argument("title")
    p.add_argument("--start", type=int, help="Only revisions older than this id")
    p.add_argument("--limit", type=int, default=50)

    for name, help_text in (
        ("recent", "Raw recent changes"),
        ("latest", "Random sample of latest revision ids"),
        ("latest-ores", "Random sample of ORES-flagged latest revision ids"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--direction", choices=["older", "newer"])
        p.add_argument("--timestamp", help="Start timestamp, e.g. 2020-03-28T19:51:23Z")
        p.add_argument("--limit", type=int, default=500 if name == "recent" else 10)
        p.add_argument("--bad", action="store_true", help="Hide edits already reviewed via ORES")
        p.add_argument("--last", action="store_true", help="Only the latest revision of each page")

    p = sub.add_parser("last-revisions", help="Latest revision of each title (raw)")
    p.add_argument("titles", nargs="+")
    p.add_argument("--continue", dest="continuation", help="rvcontinue from a previous response")

    p = sub.add_parser("diff", help="Diff of a revision against the previous one")
    p.add_argument("revision_id", type=int)
    p.add_argument("--lines", action="store_true", help="Print only added and removed lines")

    p = sub.add_parser("category", help="All members of a category")
    p.add_argument("title")

    return parser


def main():
    """Main entry point."""
    settings = load_settings(CONFIG_PATH)
    args = build_parser(settings.default_wiki).parse_args()

    logger = setup_logging(
        name="query",
        wiki_id=args.wiki,
        log_dir=settings.log_dir,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    client = settings.make_client(logger=logger)
    logger.info(f"User-Agent: {settings.user_agent}")

    try:
        if args.command == "pageinfo":
            dump([p.to_dict() for p in client.get_page_infos_by_titles(args.wiki, args.titles)])
        elif args.command == "revisions":
            dump(client.get_revision_ids_by_title(args.wiki, args.title, args.start, args.limit))
        elif args.command in ("recent", "latest", "latest-ores"):
            ctx = RecentChangesQuery(
                wiki=args.wiki,
                direction=args.direction,
                timestamp=args.timestamp,
                limit=args.limit,
                bad=args.bad,
                is_last=args.last,
            )
            if args.command == "recent":
                dump(client.get_raw_recent_changes(ctx).raw)
            elif args.command == "latest":
                dump(client.get_latest_revision_ids(ctx))
            else:
                dump(client.get_latest_ores_revision_ids(ctx))
        elif args.command == "last-revisions":
            dump(client.get_last_revisions_by_titles(args.titles, args.wiki, args.continuation))
        elif args.command == "diff":
            diff = client.get_diff_by_wiki_rev_id(args.wiki, args.revision_id)
            dump(changed_lines(diff) if args.lines else diff)
        elif args.command == "category":
            run_category(client, args.wiki, args.title)
    except DoubleCheckError as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
