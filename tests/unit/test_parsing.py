"""Tests for form-string parsing (juris_kernel/domain/parsing.py)."""

from datetime import date
from decimal import Decimal

import pytest

from juris_kernel.domain.parsing import (
    parse_amount,
    parse_count,
    parse_date,
    parse_decimal,
    parse_optional_amount,
)
from juris_kernel.exceptions import (
    AmountFormatError,
    DateFormatError,
    FormatError,
    NumberFormatError,
)


class TestParseAmount:
    """pt-BR monetary strings."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("3000", "3000"),
            ("3000,50", "3000.50"),
            ("3.000,50", "3000.50"),
            ("1.234.567,89", "1234567.89"),
            ("R$ 1.412,00", "1412.00"),
            ("R$2.500", "2500"),
            ("  750,5  ", "750.5"),
            ("-10,25", "-10.25"),
        ],
    )
    def test_valid_amounts(self, raw, expected):
        assert parse_amount(raw) == Decimal(expected)

    def test_keeps_exact_cents(self):
        assert parse_amount("0,10") + parse_amount("0,20") == Decimal("0.30")

    @pytest.mark.parametrize("raw", ["", "abc", "1,234.56", "12.34", "1.2345,00", "3000,", "R$"])
    def test_invalid_amounts(self, raw):
        with pytest.raises(AmountFormatError) as exc_info:
            parse_amount(raw)

        assert exc_info.value.raw_value == raw
        assert exc_info.value.code == "AMOUNT_FORMAT_ERROR"

    def test_format_errors_share_base(self):
        with pytest.raises(FormatError):
            parse_amount("x")


class TestParseOptionalAmount:

    def test_blank_is_none(self):
        assert parse_optional_amount("") is None
        assert parse_optional_amount("   ") is None
        assert parse_optional_amount(None) is None

    def test_value_parsed(self):
        assert parse_optional_amount("10.000,00") == Decimal("10000.00")


class TestParseDecimal:
    """Plain decimal numbers such as penalty years."""

    def test_comma_separator(self):
        assert parse_decimal("0,25") == Decimal("0.25")

    def test_dot_separator(self):
        assert parse_decimal("1.5") == Decimal("1.5")

    def test_integer(self):
        assert parse_decimal(" 4 ") == Decimal("4")

    @pytest.mark.parametrize("raw", ["", "quatro", "1.000,5", "1e3"])
    def test_invalid(self, raw):
        with pytest.raises(NumberFormatError):
            parse_decimal(raw)


class TestParseCount:
    """Whole-number counts."""

    def test_string(self):
        assert parse_count("3") == 3

    def test_int_passthrough(self):
        assert parse_count(2) == 2

    def test_blank_uses_default(self):
        assert parse_count("") == 0
        assert parse_count(None, default=1) == 1

    def test_fractional_rejected(self):
        with pytest.raises(NumberFormatError):
            parse_count("1,5")

    def test_boolean_rejected(self):
        with pytest.raises(NumberFormatError):
            parse_count(True)


class TestParseDate:
    """ISO and pt-BR dates."""

    def test_iso(self):
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_pt_br(self):
        assert parse_date("15/03/2024") == date(2024, 3, 15)

    def test_date_passthrough(self):
        assert parse_date(date(2024, 3, 15)) == date(2024, 3, 15)

    def test_leap_day(self):
        assert parse_date("29/02/2024") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", ["", "2024/03/15", "15-03-2024", "3/15/2024", "amanhã"])
    def test_malformed(self, raw):
        with pytest.raises(DateFormatError):
            parse_date(raw)

    def test_impossible_date(self):
        with pytest.raises(DateFormatError) as exc_info:
            parse_date("29/02/2023")

        assert "calendar" in exc_info.value.expected
