"""Tests for date parsing of user input and statement cells."""

from datetime import date, datetime, timedelta

import pytest

from ledgerkit.utils.date_parser import parse_date, parse_statement_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_day_first_date():
    """Test that slash dates are read day first."""
    assert parse_date("05/01/2024") == date(2024, 1, 5)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("Yesterday ") == date.today() - timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_this_week():
    """Test parsing 'this week' gives this week's Monday."""
    result = parse_date("this week")
    assert result.weekday() == 0
    assert date.today() - result < timedelta(days=7)


def test_parse_invalid_date():
    """Test that garbage raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


class TestStatementDates:
    """Tests for parse_statement_date."""

    def test_template_format_first(self):
        """Test that the template's ordering decides ambiguous dates."""
        assert parse_statement_date("03/04/2024", "DD/MM/YYYY") == date(2024, 4, 3)

    def test_iso_format(self):
        assert parse_statement_date("2024-02-01", "YYYY-MM-DD") == date(2024, 2, 1)

    def test_fallback_without_format(self):
        """Test fallback orderings when no template format is given."""
        assert parse_statement_date("15-01-2024") == date(2024, 1, 15)
        assert parse_statement_date("2024/01/15") == date(2024, 1, 15)

    def test_dateutil_fallback(self):
        """Test that textual dates fall back to dateutil."""
        assert parse_statement_date("5 Jan 2024") == date(2024, 1, 5)

    def test_spreadsheet_values(self):
        """Test date and datetime cells from spreadsheets."""
        assert parse_statement_date(datetime(2024, 1, 5, 10, 30)) == date(2024, 1, 5)
        assert parse_statement_date(date(2024, 1, 5)) == date(2024, 1, 5)

    @pytest.mark.parametrize("value", ["5", "2024", "Jan 2024", "15/03"])
    def test_partial_dates_are_rejected(self, value):
        """Test that missing date parts are not filled in from today."""
        assert parse_statement_date(value) is None

    @pytest.mark.parametrize("value", [None, "", "   ", "32/13/2024", "soon"])
    def test_unparseable_returns_none(self, value):
        assert parse_statement_date(value, "DD/MM/YYYY") is None
