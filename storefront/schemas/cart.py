# storefront/schemas/cart.py
import uuid
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.core.pricing import MAX_QUANTITY, Money
from storefront.schemas.order import ShippingAddress

DEFAULT_PAYMENT_METHOD = "PayPal"


class CartItem(SQLModel):
    """
    One cart entry: a product snapshot plus the requested quantity.
    """

    product_id: uuid.UUID
    name: str
    image: str
    unit_price: Money
    count_in_stock: int
    quantity: int = Field(gt=0, le=MAX_QUANTITY)


class CartState(SQLModel):
    """
    Whole cart snapshot as stored and returned to clients.

    Items keep insertion order; product_id is unique across items.
    The four totals are derived and only ever written by update_cart().
    """

    items: list[CartItem] = []
    shipping_address: ShippingAddress | None = None
    payment_method: str = DEFAULT_PAYMENT_METHOD
    items_total: Money = Decimal("0.00")
    shipping_total: Money = Decimal("0.00")
    tax_total: Money = Decimal("0.00")
    grand_total: Money = Decimal("0.00")


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart. Re-adding a product sets its quantity.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    quantity: int = Field(gt=0, le=MAX_QUANTITY)


class PaymentMethodUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    payment_method: str = Field(max_length=50)

    @field_validator("payment_method")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("payment_method cannot be empty")
        return v


class FavoriteProduct(SQLModel):
    product_id: uuid.UUID
    name: str
    price: Money
    image: str | None = None


class FavoriteCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID


class FavoritesRead(SQLModel):
    items: list[FavoriteProduct] = []
