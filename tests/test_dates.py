from datetime import datetime, timezone

import pytest

from utils.dates import age_in_hours, parse_published_at
from tests.conftest import NOW


def test_parse_iso_with_z_suffix():
    assert parse_published_at("2026-10-18T10:00:00Z", NOW) == datetime(2026, 10, 18, 10, tzinfo=timezone.utc)


def test_parse_iso_with_offset_converts_to_utc():
    assert parse_published_at("2026-10-18T17:00:00+07:00", NOW) == datetime(2026, 10, 18, 10, tzinfo=timezone.utc)


def test_naive_timestamp_is_treated_as_utc():
    parsed = parse_published_at("2026-10-18T10:00:00", NOW)
    assert parsed.tzinfo is not None
    assert parsed == datetime(2026, 10, 18, 10, tzinfo=timezone.utc)


@pytest.mark.parametrize("text,expected", [
    ("3 hours ago", datetime(2026, 10, 18, 9, tzinfo=timezone.utc)),
    ("an hour ago", datetime(2026, 10, 18, 11, tzinfo=timezone.utc)),
    ("45 mins ago", datetime(2026, 10, 18, 11, 15, tzinfo=timezone.utc)),
    ("2 days ago", datetime(2026, 10, 16, 12, tzinfo=timezone.utc)),
    ("1 week ago", datetime(2026, 10, 11, 12, tzinfo=timezone.utc)),
    ("yesterday", datetime(2026, 10, 17, 12, tzinfo=timezone.utc)),
    ("just now", NOW),
])
def test_parse_relative_phrases(text, expected):
    assert parse_published_at(text, NOW) == expected


def test_parse_absolute_date():
    assert parse_published_at("Oct 17, 2026", NOW) == datetime(2026, 10, 17, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
def test_unparseable_values_return_none(value):
    assert parse_published_at(value, NOW) is None


def test_age_in_hours():
    assert age_in_hours("3 hours ago", NOW) == pytest.approx(3.0)
    assert age_in_hours("2026-10-17T12:00:00Z", NOW) == pytest.approx(24.0)


def test_age_in_hours_future_date_is_zero():
    assert age_in_hours("2026-10-19T12:00:00Z", NOW) == 0.0


def test_age_in_hours_unparseable_is_none():
    assert age_in_hours("sometime last spring", NOW) is None
