# streamhub/comments/schemas.py
from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from streamhub.core.schemas import CamelModel


class CommentAuthor(CamelModel):
    id: int
    username: str
    profile_picture: str | None = None


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    video_id: int
    parent_id: int | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v


class CommentUpdate(CamelModel):
    content: str | None = Field(default=None, min_length=1, max_length=5000)

    @field_validator("content", mode="before")
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v


class CommentOut(CamelModel):
    id: int
    content: str
    video_id: int
    user_id: int
    # nombre al momento de comentar (no se actualiza si el autor se renombra)
    username: str
    parent_id: int | None = None
    created_at: datetime | None = None
    # autor "vivo" (None si la cuenta ya no existe)
    author: CommentAuthor | None = None
    replies: list[CommentOut] = []


CommentOut.model_rebuild()


class CommentPage(CamelModel):
    comments: list[CommentOut]
    total: int
    page: int
    pages: int
