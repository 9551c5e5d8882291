# storefront/models/product.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    `price` is the authoritative unit price used when an order is created.
    `rating` / `num_reviews` are derived from the Review rows.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    image: str = Field(
        description="Public image URL (see POST /uploads)",
    )

    brand: str = Field(max_length=100)

    quantity: int = Field(
        default=0,
        ge=0,
        description="Quantity shown on the product page",
    )

    category_id: uuid.UUID = Field(
        foreign_key="categories.id",
        index=True,
    )

    description: str

    rating: float = Field(default=0.0, description="Average review rating")
    num_reviews: int = Field(default=0, ge=0)

    price: Decimal = Field(
        default=Decimal("0.00"),
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price",
    )

    count_in_stock: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Review(SQLModel, table=True):
    """
    Customer review of a product. One review per (product, user).
    """

    __tablename__ = "product_reviews"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    name: str = Field(description="Reviewer display name at review time")
    rating: int = Field(ge=1, le=5)
    comment: str

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
