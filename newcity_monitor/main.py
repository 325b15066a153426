from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from . import config, notifier, scraper, store
from .models import Snapshot
from .report import RenderOptions, build_report

EXIT_OK = 0
EXIT_BAD_CACHE = 1
EXIT_SCRAPE_FAILED = 2
EXIT_DELIVERY_FAILED = 3
EXIT_CACHE_WRITE_FAILED = 4


def setup_logging(level_name: str = config.LOG_LEVEL) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newcity-monitor",
        description="Post today's New City Microcreamery flavors (or what changed) to Discord.",
    )
    parser.add_argument("--token", default=config.BOT_TOKEN,
                        help="Bot token for the Discord API (default: $BOT_TOKEN)")
    parser.add_argument("--channel-id", type=int, default=config.DISCORD_CHANNEL_ID,
                        help="Channel ID the bot should post to")
    parser.add_argument("--webhook-url", default=config.DISCORD_WEBHOOK_URL,
                        help="Post through this webhook instead of the bot")
    parser.add_argument("--menu-url", default=config.MENU_URL,
                        help="Menu page to scrape")

    only = parser.add_mutually_exclusive_group()
    only.add_argument("--only-originals", action="store_const", dest="only_category",
                      const=config.ORIGINALS_CATEGORY,
                      help=f"Only report the '{config.ORIGINALS_CATEGORY}' flavors")
    only.add_argument("--only-category", dest="only_category", metavar="NAME",
                      help="Only report the flavors of this menu section")

    parser.add_argument("--cache", action=argparse.BooleanOptionalAction, default=config.USE_CACHE,
                        help="Use the cache to report only changed flavors (default: $USE_CACHE)")
    parser.add_argument("--print-unchanged", action=argparse.BooleanOptionalAction,
                        default=config.PRINT_UNCHANGED,
                        help="Output even if the flavors have not changed (default: $PRINT_UNCHANGED)")
    parser.add_argument("--read-cache-path", default=config.CACHE_PATH,
                        help="Path to read the cache from (only with --cache)")
    parser.add_argument("--write-cache-path", default=config.CACHE_PATH,
                        help="Path to write the cache to (only with --cache)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the messages instead of posting them; the cache is not written")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        help="DEBUG, INFO, WARNING or ERROR")
    parser.set_defaults(only_category=config.ONLY_CATEGORY)
    return parser


def run(args: argparse.Namespace) -> int:
    """One scrape-report-deliver cycle. Returns the process exit code."""
    logger = logging.getLogger(__name__)

    previous: Optional[Snapshot] = None
    if args.cache:
        try:
            previous = store.load_snapshot(args.read_cache_path)
        except store.MalformedPriorData as e:
            logger.error("Cannot use cache: %s", e)
            return EXIT_BAD_CACHE

    try:
        current = scraper.fetch_flavors(args.menu_url)
    except Exception:
        logger.exception("Failed to fetch flavors from %s", args.menu_url)
        return EXIT_SCRAPE_FAILED

    options = RenderOptions(
        only_category=args.only_category,
        include_unchanged_notice=args.print_unchanged,
        compare_against_previous=args.cache,
    )
    report = build_report(current, previous, options)
    for note in report.notes:
        logger.info("%s", note)

    if args.dry_run:
        for message in report.messages:
            print(message)
        logger.info("Dry run: %d messages printed, cache left untouched", len(report.messages))
        return EXIT_OK

    try:
        notifier.send_messages(
            report.messages,
            token=args.token,
            channel_id=args.channel_id,
            webhook_url=args.webhook_url,
        )
    except notifier.DeliveryFailure as e:
        logger.error("Delivery failed: %s", e)
        return EXIT_DELIVERY_FAILED

    if args.cache:
        try:
            store.save_snapshot(args.write_cache_path, current)
        except OSError:
            logger.exception("Failed to write cache to %s", args.write_cache_path)
            return EXIT_CACHE_WRITE_FAILED

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse flags, configure logging and run once."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
