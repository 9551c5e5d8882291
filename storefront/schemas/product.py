# storefront/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.core.pricing import Money
from storefront.schemas.category import CategoryRead


class ProductCreate(SQLModel):
    """
    Payload for creating a product (admin).

    `image` is the public URL returned by POST /uploads.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    image: str
    brand: str = Field(max_length=100)
    quantity: int = Field(gt=0)
    category_id: uuid.UUID
    description: str
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    count_in_stock: int = Field(default=0, ge=0)

    @field_validator("name", "image", "brand", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    image: str | None = None
    brand: str | None = Field(default=None, max_length=100)
    quantity: int | None = Field(default=None, gt=0)
    category_id: uuid.UUID | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    count_in_stock: int | None = Field(default=None, ge=0)

    @field_validator("name", "image", "brand", "description")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ReviewCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    rating: int = Field(ge=1, le=5)
    comment: str

    @field_validator("comment")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("comment cannot be empty")
        return v


class ReviewRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    rating: int
    comment: str
    created_at: datetime


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    image: str
    brand: str
    quantity: int
    category_id: uuid.UUID
    description: str
    rating: float
    num_reviews: int
    price: Money
    count_in_stock: int
    created_at: datetime
    updated_at: datetime


class ProductWithCategoryRead(ProductRead):
    category: CategoryRead | None = None


class ProductDetailRead(ProductRead):
    reviews: list[ReviewRead] = []


class ProductPage(SQLModel):
    """
    Keyword search result page.
    """

    products: list[ProductRead]
    page: int
    pages: int
    has_more: bool


class ProductFilter(SQLModel):
    """
    Storefront sidebar filter.

      - checked: category ids (empty => any category)
      - radio:   [min_price, max_price] (empty => any price)
    """

    model_config = ConfigDict(extra="forbid")

    checked: list[uuid.UUID] = []
    radio: list[Decimal] = []

    @field_validator("radio")
    @classmethod
    def price_range(cls, v: list[Decimal]) -> list[Decimal]:
        if v and len(v) != 2:
            raise ValueError("radio must be [min_price, max_price]")
        return v


class ImageUploadRead(SQLModel):
    message: str
    image: str
