"""CLI for counting words from the publisher's RSS feed."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from common.cli_helpers import default_day, parse_date, setup_logging
from common.config import Config, load_config
from common.errors import NetworkError, StoreError
from ingest_feed.bucket_articles import DateBucketer
from ingest_feed.fetch_feed.feed_source import FeedSource
from word_counts.aggregator import open_aggregator

logger = logging.getLogger(__name__)


def parse_ingest_feed_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for ingest_feed."""
    parser = argparse.ArgumentParser(description="Count words from the publisher's RSS feed")
    parser.add_argument(
        "date",
        nargs="?",
        type=parse_date,
        default=None,
        help="Day to process, YYYY-MM-DD (default: yesterday).",
    )
    parser.add_argument(
        "--full-feed",
        action="store_true",
        help="Count every article in the feed, grouped by day, instead of one day.",
    )
    parser.add_argument(
        "--count-only",
        action="store_true",
        help="Only report how many archive articles the day has; counts no words.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod) or path to YAML file. Defaults to NEW_WORDS_CONFIG or 'prod'.",
    )
    return parser.parse_args(argv)


def run(
    config: Config,
    day: date | None = None,
    full_feed: bool = False,
    count_only: bool = False,
) -> int:
    """Run one ingest pass and return the process exit code."""
    feed_source = FeedSource(config.feed, config.search)
    try:
        if count_only:
            day = day or default_day()
            logger.info("%s: %d articles in archive", day.isoformat(), feed_source.count_articles(day))
            return 0

        with open_aggregator(config.store) as aggregator:
            bucketer = DateBucketer(feed_source, aggregator)
            if full_feed:
                stats = bucketer.analyze_full_feed()
                for key in sorted(stats, reverse=True):
                    logger.info(
                        "%s: %d words from %d articles",
                        key,
                        stats[key].words_processed,
                        stats[key].article_count,
                    )
                logger.info(
                    "Total: %d words from %d articles",
                    sum(s.words_processed for s in stats.values()),
                    sum(s.article_count for s in stats.values()),
                )
            else:
                bucketer.process_day(day)
    except NetworkError as e:
        logger.error("Failed to fetch feed: %s", e)
        return 1
    except StoreError as e:
        logger.error("Word count store failed: %s", e)
        return 1
    finally:
        feed_source.close()

    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_ingest_feed_args(argv)
    setup_logging()

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(2)

    sys.exit(
        run(config, day=args.date, full_feed=args.full_feed, count_only=args.count_only)
    )


if __name__ == "__main__":
    main()
