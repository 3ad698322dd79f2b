"""Feed retrieval and the paginated search fallback."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from common.cli_helpers import date_to_range
from common.config import FeedConfig, SearchConfig
from common.datetime import from_unix_seconds
from common.errors import NetworkError
from ingest_feed.models import ArticleRecord

logger = logging.getLogger(__name__)

FEED_ACCEPT = "application/rss+xml, application/xml, text/xml"
SEARCH_ACCEPT = "application/json"
BODY_EXCERPT_CHARS = 200


def _get(session: requests.Session, url: str, timeout: float, **kwargs: Any) -> requests.Response:
    """GET a URL, raising NetworkError on transport failure or non-2xx status."""
    try:
        response = session.get(url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        raise NetworkError(f"Request to {url} failed: {e}") from e

    if not response.ok:
        raise NetworkError(
            f"Request to {url} failed",
            status=response.status_code,
            body_excerpt=(response.text or "")[:BODY_EXCERPT_CHARS],
        )
    return response


def _document_text(document: dict, *names: str) -> str:
    for name in names:
        value = document.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class FeedSource:
    """Fetches the publisher's RSS feed and searches its archive by day."""

    def __init__(
        self,
        feed: FeedConfig,
        search: SearchConfig,
        session: requests.Session | None = None,
    ) -> None:
        self.feed = feed
        self.search = search
        self.session = session or requests.Session()

    def fetch_feed(self) -> str:
        """Return the raw feed document.

        Raises:
            NetworkError: On transport failure, timeout or non-success status.
        """
        logger.info("Fetching feed %s", self.feed.url)
        response = _get(
            self.session,
            self.feed.url,
            self.feed.timeout,
            headers={"User-Agent": self.feed.user_agent, "Accept": FEED_ACCEPT},
        )
        return response.text

    def _fetch_search_page(self, page: int) -> dict:
        response = _get(
            self.session,
            self.search.url,
            self.search.timeout,
            params={
                "chrono": self.search.chrono,
                "page": page,
                "per_page": self.search.per_page,
                "locale": self.search.locale,
            },
            headers={"User-Agent": self.feed.user_agent, "Accept": SEARCH_ACCEPT},
        )
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected search response type: {type(payload).__name__}")
        return payload

    def _search(self, day: date) -> list[ArticleRecord]:
        start, end = date_to_range(day)
        articles: list[ArticleRecord] = []
        page = 0

        for _ in range(self.search.max_pages):
            result = self._fetch_search_page(page).get("result")
            if not result:
                break

            collection = result.get("collection") or []
            documents = result.get("documents") or {}
            if not collection:
                break

            reached_older = False
            for slug in collection:
                document = documents.get(slug)
                if not document:
                    continue

                published_at = from_unix_seconds(document.get("published_at"))
                if published_at is None or published_at >= end:
                    continue

                if published_at < start:
                    # Results are newest first
                    reached_older = True
                    break

                articles.append(
                    ArticleRecord(
                        title=_document_text(document, "title"),
                        description=_document_text(document, "description", "second_title"),
                        published_at=published_at,
                    )
                )

            next_page = result.get("next_page")
            if reached_older or next_page is None:
                break
            page = next_page if isinstance(next_page, int) and next_page > page else page + 1
        else:
            logger.warning("Stopped searching %s after %d pages", day.isoformat(), self.search.max_pages)

        return articles

    def search_by_date(self, day: date) -> list[ArticleRecord]:
        """Articles published on the given UTC day, from the search endpoint.

        Fails softly: any transport or parse error yields an empty list.
        """
        logger.info("Searching archive for articles on %s", day.isoformat())
        try:
            articles = self._search(day)
        except (NetworkError, requests.RequestException, ValueError, AttributeError, TypeError) as e:
            logger.warning("Archive search for %s failed: %s", day.isoformat(), e)
            return []

        logger.info("Archive search found %d articles on %s", len(articles), day.isoformat())
        return articles

    def count_articles(self, day: date) -> int:
        """Number of articles the archive reports for the given day."""
        return len(self.search_by_date(day))

    def close(self) -> None:
        self.session.close()
