"""Tests for date parser with relative dates and named periods."""

import pytest
from datetime import date
from shopbooks.utils.date_parser import parse_date, get_date_range

# A Wednesday in a leap year
TODAY = date(2024, 3, 20)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_standard_formats():
    """Formats handled by dateutil."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("today", date(2024, 3, 20)),
        ("Yesterday", date(2024, 3, 19)),
        ("tomorrow ", date(2024, 3, 21)),
        ("this month", date(2024, 3, 1)),
        ("last month", date(2024, 2, 1)),
        ("next month", date(2024, 4, 1)),
        ("this year", date(2024, 1, 1)),
        ("last year", date(2023, 1, 1)),
        ("this week", date(2024, 3, 18)),
        ("last week", date(2024, 3, 11)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_relative_defaults_to_today():
    assert parse_date("today") == date.today()


def test_last_month_from_january():
    assert parse_date("last month", today=date(2024, 1, 31)) == date(2023, 12, 1)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-month", (date(2024, 3, 1), date(2024, 3, 20))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("this-year", (date(2024, 1, 1), date(2024, 3, 20))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_last_month_across_year_boundary():
    assert get_date_range("last-month", today=date(2024, 1, 5)) == (
        date(2023, 12, 1),
        date(2023, 12, 31),
    )


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")
