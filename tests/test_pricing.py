import uuid
from decimal import ROUND_HALF_UP, Decimal

import pytest

from storefront.core.errors import InvalidLineItem
from storefront.core.pricing import MAX_AMOUNT, MAX_QUANTITY, LineItem, compute_totals


def _item(price, qty: int = 1) -> LineItem:
    return LineItem(product_id=uuid.uuid4(), unit_price=price, quantity=qty)


def test_empty_items_still_pay_flat_shipping() -> None:
    totals = compute_totals([])

    assert totals.items_total == "0.00"
    assert totals.shipping_total == "10.00"
    assert totals.tax_total == "0.00"
    assert totals.grand_total == "10.00"


def test_free_shipping_above_threshold() -> None:
    totals = compute_totals([_item(Decimal("60.00"), 2)])

    assert totals.items_total == "120.00"
    assert totals.shipping_total == "0.00"
    assert totals.tax_total == "18.00"
    assert totals.grand_total == "138.00"


@pytest.mark.parametrize(
    ("price", "shipping"),
    [
        ("100.00", "10.00"),
        ("100.01", "0.00"),
        ("99.99", "10.00"),
    ],
)
def test_shipping_threshold_is_strictly_above_100(price: str, shipping: str) -> None:
    assert compute_totals([_item(Decimal(price))]).shipping_total == shipping


def test_tax_rounds_half_up() -> None:
    # 10.30 * 0.15 = 1.545; half-even would give 1.54
    totals = compute_totals([_item(Decimal("10.30"))])

    assert totals.tax_total == "1.55"
    assert totals.grand_total == "21.85"


def test_items_total_rounds_half_up() -> None:
    assert compute_totals([_item(Decimal("0.125"))]).items_total == "0.13"


def test_float_prices_do_not_drift() -> None:
    totals = compute_totals([_item(0.1, 3)])

    assert totals.items_total == "0.30"
    assert totals.tax_total == "0.05"


@pytest.mark.parametrize(
    "items",
    [
        [("19.99", 3), ("5.01", 1)],
        [("33.33", 3)],
        [("0.01", 1)],
        [("250.00", 1), ("0.99", 7)],
    ],
)
def test_grand_total_is_sum_of_parts(items: list[tuple[str, int]]) -> None:
    totals = compute_totals([_item(Decimal(p), q) for p, q in items])

    assert Decimal(totals.grand_total) == (
        Decimal(totals.items_total)
        + Decimal(totals.shipping_total)
        + Decimal(totals.tax_total)
    )
    assert Decimal(totals.tax_total) == (Decimal(totals.items_total) * Decimal("0.15")).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


def test_values_always_have_two_fraction_digits() -> None:
    totals = compute_totals([_item(5, 3)])

    assert totals.items_total == "15.00"
    assert totals.tax_total == "2.25"
    assert totals.grand_total == "27.25"


@pytest.mark.parametrize(
    ("price", "qty"),
    [
        (Decimal("-1.00"), 1),
        (float("nan"), 1),
        (Decimal("Infinity"), 1),
        ("abc", 1),
        (True, 1),
        (Decimal("5.00"), 0),
        (Decimal("5.00"), -2),
        (Decimal("5.00"), 1.5),
        (Decimal("5.00"), MAX_QUANTITY + 1),
        (Decimal("5.00"), 2**63),
    ],
)
def test_invalid_line_items_are_rejected(price, qty) -> None:
    with pytest.raises(InvalidLineItem):
        compute_totals([_item(price, qty)])


def test_total_must_fit_money_columns() -> None:
    with pytest.raises(InvalidLineItem):
        compute_totals([_item(MAX_AMOUNT, 2)])


def test_large_total_within_column_range() -> None:
    # 60000000.00 + 15% tax stays below MAX_AMOUNT
    totals = compute_totals([_item(Decimal("6000.00"), MAX_QUANTITY)])
    assert totals.grand_total == "69000000.00"
