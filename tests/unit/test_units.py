"""
Тесты для Units — валидация количеств и конверсия единиц
"""

from decimal import Decimal

import pytest

from lpdex.core.domain.units import (
    DEFAULT_DECIMALS,
    MAX_AMOUNT,
    format_units,
    parse_units,
    validate_amount,
)


class TestValidateAmount:

    def test_accepts_zero_and_max(self):
        assert validate_amount("x", 0) == 0
        assert validate_amount("x", MAX_AMOUNT) == MAX_AMOUNT

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_amount("x", -1)

    def test_rejects_above_uint256(self):
        with pytest.raises(ValueError, match="uint256"):
            validate_amount("x", MAX_AMOUNT + 1)

    @pytest.mark.parametrize("value", [1.0, "1", None, True, Decimal("1")])
    def test_rejects_non_int(self, value):
        with pytest.raises(TypeError):
            validate_amount("x", value)


class TestParseUnits:

    def test_whole_units(self):
        assert parse_units("1") == 10**DEFAULT_DECIMALS
        assert parse_units(1000) == 1000 * 10**18

    def test_fractional_units(self):
        assert parse_units("0.5") == 5 * 10**17
        assert parse_units("0.5", 6) == 500_000
        assert parse_units(Decimal("1.25"), 2) == 125

    def test_too_many_decimals(self):
        with pytest.raises(ValueError, match="decimal places"):
            parse_units("0.001", 2)

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            parse_units(0.1)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            parse_units("one ether")

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            parse_units("-1")


class TestFormatUnits:

    def test_whole(self):
        assert format_units(10**18) == "1"
        assert format_units(0) == "0"

    def test_fraction_strips_trailing_zeros(self):
        assert format_units(1500 * 10**15) == "1.5"
        assert format_units(1, 18) == "0.000000000000000001"

    def test_parse_format_inverse(self):
        assert format_units(parse_units("123.456")) == "123.456"
