"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
import re
from datetime import date, datetime, timedelta, timezone

from common.errors import ValidationError

DAY_FORMAT = "%Y-%m-%d"
DAY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def validate_day(value: str, field_name: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string.

    Args:
        value: Date string in YYYY-MM-DD format.
        field_name: Name of the field for error messages.

    Returns:
        Parsed date object.

    Raises:
        ValidationError: If the value is not a valid date in that exact form.
    """
    if not isinstance(value, str) or not DAY_RE.fullmatch(value):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD, got {value!r}")
    try:
        return datetime.strptime(value, DAY_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD, got {value!r}") from exc


def parse_date(value: str, field_name: str = "date") -> date:
    """Parse a date string for argparse arguments.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid date.
    """
    try:
        return validate_day(value, field_name)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def default_day(today: date | None = None) -> date:
    """Yesterday in local process time."""
    today = today or date.today()
    return today - timedelta(days=1)


def date_to_range(d: date) -> tuple[datetime, datetime]:
    """Convert a date to the half-open UTC range covering the full day.

    Returns:
        Tuple of (start, end) where start is UTC midnight and end is 24 hours later.
    """
    start = datetime.combine(d, datetime.min.time(), tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    return start, end

