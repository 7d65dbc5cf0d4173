# streamhub/videos/schemas.py
from datetime import datetime

from pydantic import Field, field_validator

from streamhub.core.schemas import CamelModel
from streamhub.users.schemas import UserMini


class OwnerDetail(UserMini):
    # ids como string, igual que `likes`
    subscribers: list[str] = []


class VideoOut(CamelModel):
    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str | None = None
    owner_id: int
    owner: UserMini | None = None
    views: int = 0
    likes: list[str] = []
    likes_count: int = 0
    duration: float
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VideoDetailOut(VideoOut):
    owner: OwnerDetail | None = None


class VideoUpdate(CamelModel):
    """Solo el dueño; lo que no llega no se toca."""
    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    tags: list[str] | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v


class LikeOut(CamelModel):
    liked: bool
    likes_count: int


class ViewOut(CamelModel):
    views: int


class HistoryEntryOut(CamelModel):
    video: VideoOut
    watched_at: datetime
