# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Shopper / staff profile.

    Sign-up, passwords and sessions belong to Supabase Auth; this row only
    mirrors the identity (`id` is the JWT "sub") and stores what the shop
    needs: a display username and the admin flag.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(primary_key=True, index=True)

    email: str = Field(unique=True, index=True)

    # Shown on reviews; local part of the email until the user changes it
    username: str = Field(max_length=50)

    # "user" | "admin"
    role: str = Field(default="user", index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
