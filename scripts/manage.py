#!/usr/bin/env python3
import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from page_analyzer.checker.fetcher import PageFetcher
from page_analyzer.common.db import Database
from page_analyzer.common.errors import PageAnalyzerError, StorageError
from page_analyzer.service import PageAnalyzer
from page_analyzer.storage.checks import CheckRepository
from page_analyzer.storage.urls import UrlRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Register pages and run SEO checks against them.")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Register a URL")
    add.add_argument("url")

    check = sub.add_parser("check", help="Fetch a registered URL and record a check")
    check.add_argument("url_id", type=int)

    show = sub.add_parser("show", help="Show a URL and its checks, newest first")
    show.add_argument("url_id", type=int)

    sub.add_parser("list", help="List registered URLs with their latest check")
    return parser


def _run(analyzer: PageAnalyzer, args: argparse.Namespace) -> None:
    if args.command == "add":
        url = analyzer.add_url(args.url)
        print(f"Page added: id={url.id} {url.name}")
    elif args.command == "check":
        check = analyzer.run_check(args.url_id)
        print(f"Check #{check.id}: status={check.status_code} title={check.title!r}")
    elif args.command == "show":
        url = analyzer.get_url(args.url_id)
        print(f"{url.id}\t{url.name}\t{url.created_at:%Y-%m-%d %H:%M}")
        for check in analyzer.list_checks(url.id):
            print(
                f"  #{check.id}\t{check.status_code}\t{check.created_at:%Y-%m-%d %H:%M}"
                f"\t{check.title!r}\t{check.h1!r}\t{check.description!r}"
            )
    else:
        for summary in analyzer.list_urls():
            last = "-"
            if summary.last_checked_at is not None:
                last = f"{summary.last_status_code} at {summary.last_checked_at:%Y-%m-%d %H:%M}"
            print(f"{summary.url.id}\t{summary.url.name}\t{last}")


def main() -> int:
    args = _build_parser().parse_args()

    db = Database.connect()
    try:
        with PageFetcher() as fetcher:
            _run(PageAnalyzer(UrlRepository(db), CheckRepository(db), fetcher), args)
    except StorageError as exc:
        logger.error("storage error command=%s", args.command, exc_info=exc)
        print(f"storage error: {exc}", file=sys.stderr)
        return 2
    except PageAnalyzerError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
