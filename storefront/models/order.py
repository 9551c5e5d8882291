# storefront/models/order.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    Prices and totals are frozen at creation time. The only fields that
    change afterwards are the paid/delivered flags, their timestamps and
    the payment confirmation fields.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    # Shipping address
    address: str
    city: str
    postal_code: str
    country: str

    payment_method: str

    # Payment gateway confirmation (set by mark-paid)
    payment_id: str | None = None
    payment_status: str | None = None
    payment_update_time: str | None = None
    payer_email: str | None = None

    items_total: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    shipping_total: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    tax_total: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    grand_total: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)

    is_paid: bool = Field(default=False, index=True)
    paid_at: datetime | None = None

    is_delivered: bool = Field(default=False)
    delivered_at: datetime | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class OrderItem(SQLModel, table=True):
    """
    Frozen line item inside an order.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    # No FK: the frozen item outlives catalog deletions
    product_id: uuid.UUID = Field(index=True)

    name: str
    image: str

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    # Catalog price at time of order
    unit_price: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Unit price at time of order",
    )
