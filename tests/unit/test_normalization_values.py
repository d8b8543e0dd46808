"""Tests for the lenient money and date parsers."""

import time
from collections.abc import Generator
from datetime import date

import pytest

from findoc.normalization.values import (
    normalize_statement_month,
    normalize_transaction_date,
    parse_date,
    parse_money,
)


@pytest.fixture(params=["UTC", "America/Los_Angeles", "Pacific/Kiritimati", "Asia/Tokyo"])
def local_timezone(
    request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch
) -> Generator[str, None, None]:
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", request.param)
    time.tzset()
    yield request.param
    monkeypatch.undo()
    time.tzset()


class TestParseMoney:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$1,234.56", 1234.56),
            ("1,000", 1000.0),
            (" $ 98.10 ", 98.1),
            ("-45.00 USD", -45.0),
            ("$-1,200.00", -1200.0),
            (1500, 1500.0),
            (12.5, 12.5),
        ],
    )
    def test_parses_formatted_amounts(self, raw: object, expected: float) -> None:
        assert parse_money(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, "", "N/A", "$", "1.2.3", "--5", True, False, [], {}, float("nan"), float("inf")],
    )
    def test_malformed_input_returns_none(self, raw: object) -> None:
        assert parse_money(raw) is None

    def test_result_is_float(self) -> None:
        assert isinstance(parse_money(7), float)


class TestParseDate:
    def test_parses_iso(self) -> None:
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_parses_long_form(self) -> None:
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_slash_date_is_month_first_by_default(self) -> None:
        assert parse_date("05/01/2024") == date(2024, 5, 1)

    def test_slash_date_follows_day_first_order(self) -> None:
        assert parse_date("05/01/2024", "DMY") == date(2024, 1, 5)
        assert parse_date("19/01/2024", "DMY") == date(2024, 1, 19)

    def test_iso_date_ignores_slash_order(self) -> None:
        assert parse_date("2024-01-02", "DMY") == date(2024, 1, 2)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not a date", "2024-13-45", 20240115])
    def test_malformed_input_returns_none(self, raw: object) -> None:
        assert parse_date(raw) is None


class TestNormalizeTransactionDate:
    def test_iso_date_is_unchanged(self) -> None:
        assert normalize_transaction_date("2024-01-15") == "2024-01-15"

    def test_is_idempotent(self) -> None:
        once = normalize_transaction_date("01/15/2024")
        assert normalize_transaction_date(once) == once

    def test_slash_date_is_month_first_by_default(self) -> None:
        assert normalize_transaction_date("01/15/2024") == "2024-01-15"

    def test_single_digit_parts_are_padded(self) -> None:
        assert normalize_transaction_date("1/5/2024") == "2024-01-05"

    def test_two_digit_year(self) -> None:
        assert normalize_transaction_date("03/07/24") == "2024-03-07"

    def test_day_first_order(self) -> None:
        assert normalize_transaction_date("15/01/2024", slash_order="DMY") == "2024-01-15"

    def test_impossible_slash_date_returns_none(self) -> None:
        assert normalize_transaction_date("15/01/2024") is None

    def test_last_day_of_month_is_not_shifted(self, local_timezone: str) -> None:
        assert normalize_transaction_date("01/31/2024") == "2024-01-31"
        assert normalize_transaction_date("01/01/2024") == "2024-01-01"

    def test_independent_of_local_timezone(self, local_timezone: str) -> None:
        assert normalize_transaction_date("01/15/2024") == "2024-01-15"
        assert normalize_transaction_date("2024-01-15") == "2024-01-15"

    def test_offset_timestamp_keeps_its_calendar_day(self, local_timezone: str) -> None:
        assert normalize_transaction_date("2024-01-15T23:30:00-08:00") == "2024-01-15"

    def test_free_form_date(self) -> None:
        assert normalize_transaction_date("Jan 5, 2024") == "2024-01-05"

    @pytest.mark.parametrize("raw", [None, "", "yesterday-ish", "2024-02-30", 42])
    def test_invalid_input_returns_none(self, raw: object) -> None:
        assert normalize_transaction_date(raw) is None


class TestNormalizeStatementMonth:
    def test_first_of_month_is_unchanged(self) -> None:
        assert normalize_statement_month("2024-01-01") == "2024-01-01"

    def test_mid_month_date_moves_to_first(self) -> None:
        assert normalize_statement_month("2024-01-17") == "2024-01-01"

    def test_month_name(self) -> None:
        assert normalize_statement_month("January 2024") == "2024-01-01"

    @pytest.mark.parametrize("raw", ["March", "Mar", "March 15"])
    def test_month_without_year_returns_none(self, raw: str) -> None:
        assert normalize_statement_month(raw) is None

    @pytest.mark.parametrize("raw", [None, "", "unknown", 202401])
    def test_invalid_input_returns_none(self, raw: object) -> None:
        assert normalize_statement_month(raw) is None
