# storefront/core/pricing.py
"""
Order/cart price computation.

All arithmetic is done with Decimal and rounded half-up to cents, so totals
never drift by a cent the way binary floats do.
"""
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any, Iterable, Protocol

from pydantic import PlainSerializer

from storefront.core.errors import InvalidLineItem

CENTS = Decimal("0.01")

# Orders strictly above this amount ship for free
FREE_SHIPPING_THRESHOLD = Decimal("100.00")
FLAT_SHIPPING_FEE = Decimal("10.00")

# Fixed tax rate (15%)
TAX_RATE = Decimal("0.15")

# Money columns are Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")
MAX_QUANTITY = 10_000


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places using round-half-up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    return f"{quantize_money(Decimal(value)):.2f}"


# Decimal amount that always serializes as a "12.30" string in JSON responses
Money = Annotated[
    Decimal,
    PlainSerializer(format_money, return_type=str, when_used="json"),
]


class PricedItem(Protocol):
    unit_price: Any
    quantity: Any


@dataclass(frozen=True, slots=True)
class LineItem:
    product_id: uuid.UUID
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True, slots=True)
class Totals:
    items_total: str
    shipping_total: str
    tax_total: str
    grand_total: str


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise InvalidLineItem(f"price must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        price = value
    else:
        try:
            price = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidLineItem(f"price must be numeric, got {value!r}")

    if not price.is_finite():
        raise InvalidLineItem(f"price must be finite, got {value!r}")
    if price < 0:
        raise InvalidLineItem(f"price cannot be negative, got {value!r}")
    return price


def _to_quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidLineItem(f"quantity must be an integer, got {value!r}")
    if value < 1:
        raise InvalidLineItem(f"quantity must be >= 1, got {value!r}")
    if value > MAX_QUANTITY:
        raise InvalidLineItem(f"quantity must be <= {MAX_QUANTITY}, got {value!r}")
    return value


def compute_totals(items: Iterable[PricedItem]) -> Totals:
    """
    Compute cart/order totals.

    Rules:
      - items_total    = sum(unit_price * quantity), rounded to cents
      - shipping_total = 0.00 above 100.00, otherwise a flat 10.00
      - tax_total      = 15% of items_total, rounded to cents
      - grand_total    = items_total + shipping_total + tax_total

    An empty list still pays the flat shipping fee (grand_total 10.00).

    Raises:
        InvalidLineItem: negative / NaN / non-numeric price, a quantity outside
            1..MAX_QUANTITY, or a grand total above MAX_AMOUNT.
    """
    subtotal = Decimal("0")
    for item in items:
        subtotal += _to_decimal(item.unit_price) * _to_quantity(item.quantity)

    items_total = quantize_money(subtotal)
    shipping_total = (
        Decimal("0.00") if items_total > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    )
    tax_total = quantize_money(items_total * TAX_RATE)
    grand_total = quantize_money(items_total + shipping_total + tax_total)
    if grand_total > MAX_AMOUNT:
        raise InvalidLineItem(f"order total {grand_total} exceeds {MAX_AMOUNT}")

    return Totals(
        items_total=format_money(items_total),
        shipping_total=format_money(shipping_total),
        tax_total=format_money(tax_total),
        grand_total=format_money(grand_total),
    )
