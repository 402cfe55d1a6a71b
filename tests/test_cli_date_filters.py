"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from shopbooks.cli.date_filters import resolve_cli_date_range
from shopbooks.utils.date_parser import get_date_range

NO_PERIOD = {"this-month": False, "last-month": False, "this-year": False, "last-year": False}


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_multiple_periods_rejected(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={**NO_PERIOD, "this-year": True, "last-year": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_period_with_explicit_date_rejected(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date="2024-01-31",
            period_flags={**NO_PERIOD, "last-month": True},
        )

    assert "cannot be combined" in capsys.readouterr().err


def test_period_range():
    assert resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={**NO_PERIOD, "last-year": True},
    ) == get_date_range("last-year")


def test_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(), start_date="2024-02-01", end_date="2024-02-29", period_flags=NO_PERIOD
    )
    assert (start, end) == (date(2024, 2, 1), date(2024, 2, 29))


def test_open_range():
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags=NO_PERIOD
    ) == (None, None)


def test_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(), start_date="not a date", end_date=None, period_flags=NO_PERIOD
        )

    assert "Invalid start date" in capsys.readouterr().err
