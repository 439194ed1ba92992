from decimal import Decimal

import pytest

from cinexplorer.services.pricing import effective_unit_price, total_price


pytestmark = pytest.mark.unit


def test_half_price_for_two_equals_one_full_ticket():
    assert total_price(Decimal("24.90"), 2, Decimal("50")) == Decimal("24.90")


def test_without_discount_the_base_price_is_used():
    assert effective_unit_price(Decimal("35.90")) == Decimal("35.90")
    assert total_price(Decimal("35.90"), 3) == Decimal("107.70")


def test_zero_discount_matches_no_discount():
    assert total_price(Decimal("29.90"), 4, Decimal("0")) == total_price(Decimal("29.90"), 4)


def test_unit_price_is_rounded_half_up_before_multiplying():
    # 24.90 * 0.75 = 18.675 -> 18.68
    assert effective_unit_price(Decimal("24.90"), Decimal("25")) == Decimal("18.68")
    assert total_price(Decimal("24.90"), 3, Decimal("25")) == Decimal("56.04")


def test_full_discount_is_free():
    assert total_price(Decimal("39.90"), 10, Decimal("100")) == Decimal("0.00")


def test_floats_are_read_through_their_string_form():
    assert total_price(24.9, 2, 50) == Decimal("24.90")


@pytest.mark.parametrize("discount", [Decimal("-1"), Decimal("100.01")])
def test_discount_outside_range_is_rejected(discount):
    with pytest.raises(ValueError):
        effective_unit_price(Decimal("24.90"), discount)


@pytest.mark.parametrize("quantity", [0, -3])
def test_non_positive_quantity_is_rejected(quantity):
    with pytest.raises(ValueError):
        total_price(Decimal("24.90"), quantity)
