# storefront/models/category.py
import uuid

from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Product category. Names are trimmed and unique.
    """

    __tablename__ = "categories"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=32,
        unique=True,
        index=True,
    )
