"""Group feed articles by UTC day and count their words."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from common.cli_helpers import date_to_range, default_day
from ingest_feed.fetch_feed.extract_items import extract_items
from ingest_feed.fetch_feed.feed_source import FeedSource
from ingest_feed.models import ArticleRecord, DayRunResult, FeedDayStats
from word_counts.aggregator import WordAggregator

logger = logging.getLogger(__name__)


class DateBucketer:
    """Runs the full-feed and single-day modes of the ingest pipeline."""

    def __init__(self, feed_source: FeedSource, aggregator: WordAggregator) -> None:
        self.feed_source = feed_source
        self.aggregator = aggregator

    def _count_article(self, article: ArticleRecord) -> int:
        # Title and description are tokenized separately
        return self.aggregator.process_text(article.title) + self.aggregator.process_text(
            article.description
        )

    def analyze_full_feed(self) -> dict[str, FeedDayStats]:
        """Count every dated article in the feed, grouped by UTC day."""
        document = self.feed_source.fetch_feed()

        stats: dict[str, FeedDayStats] = {}
        for article in extract_items(document):
            key = article.day_key
            if key not in stats:
                stats[key] = FeedDayStats(day_key=key)
            stats[key].article_count += 1
            stats[key].words_processed += self._count_article(article)

        logger.info(
            "Analyzed %d articles across %d days",
            sum(s.article_count for s in stats.values()),
            len(stats),
        )
        return stats

    def select_day_articles(self, day: date) -> tuple[list[ArticleRecord], bool]:
        """Articles for one UTC day, from the feed or else from the archive search.

        Returns:
            Tuple of (articles, used_fallback)
        """
        start, end = date_to_range(day)
        document = self.feed_source.fetch_feed()
        articles = [a for a in extract_items(document) if start <= a.published_at < end]
        if articles:
            logger.info("Feed has %d articles for %s", len(articles), day.isoformat())
            return articles, False

        logger.info("Feed has no articles for %s, falling back to archive search", day.isoformat())
        return self.feed_source.search_by_date(day), True

    def count_articles(self, articles: Iterable[ArticleRecord]) -> tuple[int, int]:
        """Count words of the given articles.

        Returns:
            Tuple of (words_processed, article_count)
        """
        words_processed = 0
        article_count = 0
        for article in articles:
            words_processed += self._count_article(article)
            article_count += 1
        return words_processed, article_count

    def process_day(self, day: date | None = None) -> DayRunResult:
        """Count words of one day's articles; defaults to yesterday in local time."""
        day = day or default_day()
        articles, used_fallback = self.select_day_articles(day)
        words_processed, article_count = self.count_articles(articles)

        logger.info(
            "Processed %d words from %d articles for %s%s",
            words_processed,
            article_count,
            day.isoformat(),
            " (archive search)" if used_fallback else "",
        )
        return DayRunResult(
            day_key=day.isoformat(),
            words_processed=words_processed,
            article_count=article_count,
            used_fallback=used_fallback,
        )
