"""Tests for the date cursor."""

from datetime import date, timedelta

import pytest

from portion_tracker.domain.dates import DateCursor


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ("2024-03-01", "2024-02-29"),
        ("2023-03-01", "2023-02-28"),
        ("2024-01-01", "2023-12-31"),
        ("2024-05-01", "2024-04-30"),
    ],
)
def test_previous_day_crosses_boundaries(start: str, expected: str) -> None:
    assert DateCursor.from_key(start).previous_day().to_key() == expected


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ("2023-12-31", "2024-01-01"),
        ("2024-02-28", "2024-02-29"),
        ("2024-02-29", "2024-03-01"),
        ("2023-02-28", "2023-03-01"),
        ("2000-02-28", "2000-02-29"),
        ("1900-02-28", "1900-03-01"),
    ],
)
def test_next_day_crosses_boundaries(start: str, expected: str) -> None:
    assert DateCursor.from_key(start).next_day().to_key() == expected


def test_round_trip_over_two_years() -> None:
    day = date(2023, 1, 1)
    while day < date(2025, 1, 1):
        cursor = DateCursor(day)
        assert cursor.previous_day().next_day() == cursor
        assert cursor.next_day().previous_day() == cursor
        day += timedelta(days=1)


def test_navigation_returns_new_cursor() -> None:
    cursor = DateCursor.from_key("2024-03-01")
    moved = cursor.previous_day()
    assert cursor.to_key() == "2024-03-01"
    assert moved is not cursor


def test_to_key_pads_components() -> None:
    assert DateCursor(date(987, 6, 5)).to_key() == "0987-06-05"


def test_from_key_rejects_malformed_keys() -> None:
    with pytest.raises(ValueError):
        DateCursor.from_key("2024-2-1")
    with pytest.raises(ValueError):
        DateCursor.from_key("2023-02-29")


def test_today_follows_configured_timezone() -> None:
    east = DateCursor.today("Pacific/Kiritimati")
    utc = DateCursor.today("UTC")
    assert 0 <= (east.day - utc.day).days <= 1


def test_label_renders_full_date() -> None:
    assert DateCursor.from_key("2024-01-01").label() == "Monday, 1 January 2024"


@pytest.mark.parametrize("key", ["2024-W01-1", "20240101", "2024-001", "２０２４-01-01"])
def test_from_key_rejects_other_iso_forms(key: str) -> None:
    with pytest.raises(ValueError):
        DateCursor.from_key(key)
