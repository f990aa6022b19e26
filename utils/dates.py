"""
Timestamp helpers for search-engine supplied publish dates.

Search results carry free-form dates: ISO timestamps, relative phrases
("3 hours ago") or absolute dates ("Mar 3, 2025"). Everything is normalized
to an aware UTC datetime; anything unrecognized becomes None.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser


_RELATIVE_PATTERN = re.compile(
    r"^(\d+|an?|one)\s+(second|sec|minute|min|hour|hr|day|week|month)s?\s+ago$",
    re.IGNORECASE,
)

_UNIT_SECONDS = {
    "second": 1,
    "sec": 1,
    "minute": 60,
    "min": 60,
    "hour": 3600,
    "hr": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "month": 30 * 86400,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_relative(text: str, now: datetime) -> Optional[datetime]:
    lowered = text.lower()
    if lowered in ("just now", "now"):
        return now
    if lowered == "yesterday":
        return now - timedelta(days=1)

    match = _RELATIVE_PATTERN.match(lowered)
    if not match:
        return None

    amount_text, unit = match.groups()
    amount = int(amount_text) if amount_text.isdigit() else 1
    return now - timedelta(seconds=amount * _UNIT_SECONDS[unit])


def parse_published_at(value: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a publish date string into an aware UTC datetime.

    Args:
        value: Date string as supplied by the search backend
        now: Reference time for relative phrases (defaults to current UTC time)

    Returns:
        Aware UTC datetime, or None if the value cannot be understood
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    now = _as_utc(now) if now else _utc_now()

    relative = _parse_relative(text, now)
    if relative is not None:
        return relative

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return _as_utc(date_parser.parse(text))
    except (ValueError, OverflowError):
        return None


def age_in_hours(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """Age of an article in hours (never negative), or None if the date is unparseable."""
    now = _as_utc(now) if now else _utc_now()
    published = parse_published_at(value, now)
    if published is None:
        return None
    return max(0.0, (now - published).total_seconds() / 3600)
