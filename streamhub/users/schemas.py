# streamhub/users/schemas.py
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from streamhub.core.schemas import CamelModel


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    channel_name: str | None = Field(default=None, max_length=100)
    profile_picture: str | None = None

    @field_validator("username", "channel_name", mode="before")
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _lower_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserMini(CamelModel):
    id: int
    username: str
    channel_name: str | None = None
    profile_picture: str | None = None


class UserOut(CamelModel):
    """Proyección pública de la cuenta: nunca lleva el hash."""
    id: int
    username: str
    email: EmailStr
    channel_name: str | None = None
    profile_picture: str | None = None
    joined_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    subscribers_count: int = 0


class UserProfileOut(UserOut):
    subscribers: list[UserMini] = []


class UserUpdateOut(CamelModel):
    user: UserOut


class SubscribeOut(CamelModel):
    subscribed: bool
    subscribers_count: int


class WatchLaterOut(CamelModel):
    success: bool = True
    saved: bool
