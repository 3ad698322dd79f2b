"""Word statistics endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from common.config import Config, get_config
from common.errors import NetworkError, StoreError
from ingest_feed.bucket_articles import DateBucketer
from ingest_feed.fetch_feed.feed_source import FeedSource
from words_api.dependencies import get_aggregator, get_feed_source
from words_api.models.stats import (
    AnalyzeResponse,
    ClearResponse,
    FeedDayStatsResponse,
    StatsResponse,
    WordCountResponse,
)
from word_counts.aggregator import WordAggregator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    aggregator: Annotated[WordAggregator, Depends(get_aggregator)],
    feed_source: Annotated[FeedSource, Depends(get_feed_source)],
):
    """Count every article in the feed and report words and articles per day."""
    try:
        stats = DateBucketer(feed_source, aggregator).analyze_full_feed()
    except NetworkError as e:
        logger.error("Error analyzing feed: %s", e)
        raise HTTPException(status_code=502, detail="Failed to fetch feed")
    except StoreError as e:
        logger.error("Error analyzing feed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to analyze feed")

    return AnalyzeResponse(
        stats={
            key: FeedDayStatsResponse(
                words_processed=day.words_processed,
                article_count=day.article_count,
            )
            for key, day in sorted(stats.items(), reverse=True)
        },
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    aggregator: Annotated[WordAggregator, Depends(get_aggregator)],
    config: Annotated[Config, Depends(get_config)],
    limit: Annotated[int | None, Query(ge=1, le=1000, description="Number of top words")] = None,
):
    """Total distinct words and the most frequent ones."""
    try:
        total = aggregator.total_unique_words()
        top = aggregator.top_words(limit or config.server.top_words)
    except StoreError as e:
        logger.error("Error fetching word stats: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch word statistics")

    return StatsResponse(
        total_words=total,
        top_words=[WordCountResponse(word=wc.word, count=wc.count) for wc in top],
    )


@router.post("/clear", response_model=ClearResponse)
def clear(aggregator: Annotated[WordAggregator, Depends(get_aggregator)]):
    """Remove every word counter."""
    try:
        aggregator.clear_all()
    except StoreError as e:
        logger.error("Error clearing database: %s", e)
        raise HTTPException(status_code=500, detail="Failed to clear database")

    return ClearResponse()
