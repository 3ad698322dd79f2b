"""Reporting API Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes field names in camelCase, as the dashboard expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeedDayStatsResponse(CamelModel):
    """Counters for one day of the feed."""

    words_processed: int
    article_count: int


class AnalyzeResponse(CamelModel):
    """Result of a full-feed analysis, keyed by YYYY-MM-DD."""

    success: bool = True
    stats: dict[str, FeedDayStatsResponse] = Field(default_factory=dict)
    message: str = "Feed analysis completed"


class WordCountResponse(CamelModel):
    word: str
    count: int


class StatsResponse(CamelModel):
    total_words: int
    top_words: list[WordCountResponse] = Field(default_factory=list)


class ClearResponse(CamelModel):
    success: bool = True
    message: str = "Database cleared successfully"
