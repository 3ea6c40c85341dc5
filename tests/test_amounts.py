"""
Test suite for amount conversion and formatting
"""

import pytest
from decimal import Decimal

from atm_core.amounts import as_amount, decimal_from_string, format_amount


class TestAsAmount:
    """Test conversion to Decimal"""

    def test_decimal_passes_through(self):
        value = Decimal('12.345')
        assert as_amount(value) is value

    def test_int_and_float(self):
        assert as_amount(100) == Decimal('100')
        assert as_amount(1000.01) == Decimal('1000.01')
        assert as_amount(0.1) + as_amount(0.2) == Decimal('0.3')

    def test_no_rounding(self):
        assert as_amount("10.005") == Decimal('10.005')

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            as_amount(True)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            as_amount([1])

    @pytest.mark.parametrize("value", [
        float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity"), "NaN"
    ])
    def test_non_finite_rejected(self, value):
        """NaN would make every balance comparison raise"""
        with pytest.raises(ValueError):
            as_amount(value)


class TestDecimalFromString:
    """Test lenient string parsing"""

    def test_plain(self):
        assert decimal_from_string("1000.50") == Decimal('1000.50')

    def test_negative(self):
        assert decimal_from_string("-25") == Decimal('-25')

    def test_currency_symbol_and_spaces(self):
        assert decimal_from_string("1 000,50 zł") == Decimal('1000.50')

    def test_comma_thousands_with_dot_decimal(self):
        assert decimal_from_string("1,234.56") == Decimal('1234.56')

    def test_comma_thousands_only(self):
        assert decimal_from_string("1,234") == Decimal('1234')

    def test_comma_decimal(self):
        assert decimal_from_string("13,25") == Decimal('13.25')

    @pytest.mark.parametrize("value", ["", "abc", "1.2.3"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            decimal_from_string(value)


class TestFormatAmount:
    """Test receipt formatting"""

    def test_two_places(self):
        assert format_amount(Decimal('300')) == "300.00 zł"
        assert format_amount(Decimal('13.25'), "PLN") == "13.25 PLN"

    def test_negative(self):
        assert format_amount(Decimal('-0.5')) == "-0.50 zł"
