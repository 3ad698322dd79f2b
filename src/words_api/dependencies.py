"""FastAPI dependencies for the reporting API."""

from typing import Annotated, Iterator

from fastapi import Depends

from common.config import Config, get_config
from ingest_feed.fetch_feed.feed_source import FeedSource
from word_counts.aggregator import WordAggregator, open_aggregator


def get_aggregator(config: Annotated[Config, Depends(get_config)]) -> Iterator[WordAggregator]:
    """One store handle per request, released after the response."""
    with open_aggregator(config.store) as aggregator:
        yield aggregator


def get_feed_source(config: Annotated[Config, Depends(get_config)]) -> Iterator[FeedSource]:
    feed_source = FeedSource(config.feed, config.search)
    try:
        yield feed_source
    finally:
        feed_source.close()
