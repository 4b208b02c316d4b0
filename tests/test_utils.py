from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fleet_dashboard.utils import format_time_ago, get_initials, parse_timestamp


@pytest.mark.parametrize(
    "name, expected",
    [
        ("", "?"),
        (None, "?"),
        ("   ", "?"),
        ("Madonna", "M"),
        ("John Smith", "JS"),
        ("John Middle Smith", "JS"),
        ("  amina   wanjiru ", "AW"),
        ("Émile Zola", "ÉZ"),
    ],
)
def test_get_initials(name, expected) -> None:
    assert get_initials(name) == expected


def test_parse_timestamp_assumes_utc_for_naive_values() -> None:
    parsed = parse_timestamp("2024-03-01")
    assert parsed == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-01T10:00:00Z").tzinfo is not None
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(seconds=5), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=12), "12 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(days=3), "3 days ago"),
    ],
)
def test_format_time_ago(age, expected) -> None:
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time_ago(now - age, now=now) == expected


def test_format_time_ago_accepts_iso_strings() -> None:
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time_ago("2024-06-01T10:00:00+00:00", now=now) == "2 hours ago"
    assert format_time_ago("garbage", now=now) == ""


@pytest.mark.parametrize(
    "value",
    [
        "2024-06-01T10:00:00.12345+00:00",
        "2024-06-01T10:00:00.1+00:00",
        "2024-06-01T10:00:00.1234567Z",
    ],
)
def test_parse_timestamp_accepts_any_fraction_width(value) -> None:
    parsed = parse_timestamp(value)
    assert parsed is not None
    assert parsed.replace(microsecond=0) == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


def test_format_time_ago_with_trimmed_fraction() -> None:
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time_ago("2024-06-01T10:00:00.12345+00:00", now=now) == "2 hours ago"
