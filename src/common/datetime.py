"""Datetime utilities."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from dateutil.parser import parse as parse_date

logger = logging.getLogger(__name__)

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
    "MSK": timezone(timedelta(hours=3)),
}

# Two defaults that differ in every date field; a date that parses differently
# under each is missing its day, month or year
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 3))


def parse_published_date(value: str | None) -> datetime | None:
    """Parse an RFC-822 style publish date, returning None when absent or unparsable."""
    if not value or not value.strip():
        return None

    try:
        dt, other = [parse_date(value.strip(), default=d, tzinfos=TZINFOS) for d in _DEFAULTS]
    except (ValueError, OverflowError) as e:
        logger.debug("Unparsable publish date %r: %s", value, e)
        return None

    if dt.date() != other.date():
        logger.debug("Incomplete publish date %r", value)
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def from_unix_seconds(value: Any) -> datetime | None:
    """Convert Unix seconds (int, float or numeric string) to an aware UTC datetime."""
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = int(float(value)) if isinstance(value, str) else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def day_key(value: datetime) -> str:
    """UTC calendar day of a timestamp as YYYY-MM-DD."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d")
