# storefront/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["user", "admin"]


def _clean_username(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("username cannot be empty")
    return v


class UserRead(SQLModel):
    id: uuid.UUID
    email: EmailStr
    username: str
    role: Role
    created_at: datetime


class ProfileUpdate(SQLModel):
    """
    What a shopper may change about themselves.
    Email belongs to the identity provider and is not editable here.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(max_length=50)

    normalize_username = field_validator("username")(_clean_username)


class UserAdminUpdate(SQLModel):
    """
    Admin edit of another account; omitted fields stay unchanged.
    """

    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(default=None, max_length=50)
    role: Role | None = None

    normalize_username = field_validator("username")(_clean_username)


class LogoutRead(SQLModel):
    message: str
