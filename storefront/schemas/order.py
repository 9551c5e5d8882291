# storefront/schemas/order.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.core.pricing import MAX_QUANTITY, Money


class ShippingAddress(SQLModel):
    model_config = ConfigDict(extra="forbid")

    address: str
    city: str
    postal_code: str
    country: str

    @field_validator("address", "city", "postal_code", "country")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class OrderItemRef(SQLModel):
    """
    Client reference to a catalog product.

    `price` is accepted for compatibility with clients that post whole cart
    entries, but it is never used: the catalog price always wins.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    quantity: int = Field(gt=0, le=MAX_QUANTITY)
    price: Decimal | None = None


class OrderCreate(SQLModel):
    """
    Payload for creating an order.

    Backend derives:
      - user_id from token
      - unit prices from the catalog
      - all totals
      - is_paid / is_delivered = false

    An empty `order_items` list is rejected by the service (EmptyOrder),
    not by schema validation.
    """

    model_config = ConfigDict(extra="forbid")

    order_items: list[OrderItemRef]
    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1, max_length=50)


class Payer(SQLModel):
    email_address: str | None = None


class PaymentConfirmation(SQLModel):
    """
    Payment gateway (PayPal) capture result posted by the client.
    Unknown gateway fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    status: str
    update_time: str | None = None
    payer: Payer | None = None


class PaymentResultRead(SQLModel):
    id: str | None
    status: str | None
    update_time: str | None
    email_address: str | None


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    name: str
    image: str
    quantity: int
    unit_price: Money
    line_total: Money


class OrderRead(SQLModel):
    """
    Full order view including frozen items and totals.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    order_items: list[OrderItemRead]
    shipping_address: ShippingAddress
    payment_method: str
    payment_result: PaymentResultRead | None
    items_total: Money
    shipping_total: Money
    tax_total: Money
    grand_total: Money
    is_paid: bool
    paid_at: datetime | None
    is_delivered: bool
    delivered_at: datetime | None
    created_at: datetime
    updated_at: datetime
