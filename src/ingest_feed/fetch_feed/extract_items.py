"""Tolerant extraction of articles from an RSS document.

The document is scanned as semi-structured text rather than parsed as XML,
so minor malformations elsewhere in the feed do not lose the whole run.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from common.datetime import parse_published_date
from common.text import decode_entities, strip_tags
from ingest_feed.models import ArticleRecord

logger = logging.getLogger(__name__)

ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item\s*>", re.IGNORECASE | re.DOTALL)
PUB_DATE_RE = re.compile(r"<pubDate>([^<]+)</pubDate>", re.IGNORECASE)

_FIELD_PATTERNS: dict[str, tuple[re.Pattern, re.Pattern]] = {}


def _field_patterns(name: str) -> tuple[re.Pattern, re.Pattern]:
    if name not in _FIELD_PATTERNS:
        _FIELD_PATTERNS[name] = (
            re.compile(
                rf"<{name}(?:\s[^>]*)?>\s*<!\[CDATA\[(.*?)\]\]>\s*</{name}\s*>",
                re.IGNORECASE | re.DOTALL,
            ),
            re.compile(rf"<{name}(?:\s[^>]*)?>(.*?)</{name}\s*>", re.IGNORECASE | re.DOTALL),
        )
    return _FIELD_PATTERNS[name]


def extract_field(block: str, name: str) -> str | None:
    """Raw text of a field inside an item block, preferring the CDATA form."""
    cdata_re, plain_re = _field_patterns(name)
    match = cdata_re.search(block) or plain_re.search(block)
    if match is None:
        return None
    return match.group(1)


def _clean_title(raw: str | None) -> str:
    if not raw:
        return ""
    return decode_entities(raw).strip()


def _clean_description(raw: str | None) -> str:
    if not raw:
        return ""
    # Entity-escaped markup only becomes a tag after decoding
    return strip_tags(decode_entities(strip_tags(raw))).strip()


def parse_item(block: str) -> ArticleRecord | None:
    """Parse one item block, or None when it has no usable publish date."""
    pub_date_match = PUB_DATE_RE.search(block)
    if pub_date_match is None:
        return None

    published_at = parse_published_date(pub_date_match.group(1))
    if published_at is None:
        return None

    return ArticleRecord(
        title=_clean_title(extract_field(block, "title")),
        description=_clean_description(extract_field(block, "description")),
        published_at=published_at,
    )


def extract_items(document: str) -> Iterator[ArticleRecord]:
    """Yield an ArticleRecord for every dated item in the document, in feed order."""
    found = 0
    skipped = 0
    for match in ITEM_RE.finditer(document):
        found += 1
        article = parse_item(match.group(1))
        if article is None:
            skipped += 1
            logger.debug("Skipping item without a parsable pubDate")
            continue
        yield article

    logger.info("Extracted %d items (%d skipped without a publish date)", found - skipped, skipped)
