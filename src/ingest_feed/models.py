"""Data models for the feed ingest stage."""

from dataclasses import dataclass
from datetime import datetime

from common.datetime import day_key as utc_day_key


@dataclass(frozen=True)
class ArticleRecord:
    """Article parsed from one feed item or one search result document."""
    title: str
    description: str
    published_at: datetime

    @property
    def day_key(self) -> str:
        return utc_day_key(self.published_at)


@dataclass
class FeedDayStats:
    """Per-day counters accumulated during a full-feed scan."""
    day_key: str
    words_processed: int = 0
    article_count: int = 0


@dataclass
class DayRunResult:
    """Outcome of processing a single requested day."""
    day_key: str
    words_processed: int
    article_count: int
    used_fallback: bool
