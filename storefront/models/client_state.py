# storefront/models/client_state.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class ClientState(SQLModel, table=True):
    """
    Durable per-user state snapshot (cart, favorites).

    One row per (owner_id, key). `payload` always holds the whole
    snapshot; writes overwrite it, never patch it.
    """

    __tablename__ = "client_states"

    owner_id: uuid.UUID = Field(
        foreign_key="users.id",
        primary_key=True,
    )

    # "cart" | "favorites"
    key: str = Field(primary_key=True, max_length=32)

    payload: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
