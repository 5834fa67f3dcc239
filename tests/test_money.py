from decimal import Decimal

import pytest

from backend.app.core.errors import ValidationError
from backend.app.services.money import format_money, to_cents, to_decimal, to_money, to_quantity, to_tax_rate


def test_to_money_rounds_half_up():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money("1.004") == Decimal("1.00")
    assert to_money(2.675) == Decimal("2.68")


def test_float_inputs_do_not_drift():
    assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")


def test_quantity_carries_two_places():
    assert to_quantity("1.5") == Decimal("1.50")
    assert str(to_quantity(10)) == "10.00"


def test_non_numeric_values_are_rejected():
    with pytest.raises(ValidationError):
        to_decimal("abc", "rate")
    with pytest.raises(ValidationError):
        to_decimal(None, "rate")
    with pytest.raises(ValidationError):
        to_decimal("NaN", "rate")


@pytest.mark.parametrize("value", ["0", "8.25", "100"])
def test_tax_rate_within_range(value):
    assert to_tax_rate(value) == Decimal(value).quantize(Decimal("0.01"))


@pytest.mark.parametrize("value", ["-0.01", "-0.004", "100.004", "100.01", "250"])
def test_tax_rate_out_of_range(value):
    with pytest.raises(ValidationError):
        to_tax_rate(value)


def test_missing_tax_rate_defaults_to_zero():
    assert to_tax_rate(None) == Decimal("0.00")


def test_format_money_and_cents():
    assert format_money(Decimal("1200")) == "1200.00"
    assert format_money(None) == "0.00"
    assert to_cents(Decimal("1299.00")) == 129900
    assert to_cents(Decimal("0.015")) == 2
