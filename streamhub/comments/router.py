# streamhub/comments/router.py
from __future__ import annotations

import math
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.comments import repository as repo
from streamhub.comments import service as svc
from streamhub.comments.schemas import (
    CommentCreate,
    CommentOut,
    CommentPage,
    CommentUpdate,
)
from streamhub.core.deps import get_current_user_id
from streamhub.core.schemas import MessageOut
from streamhub.db.session import get_session
from streamhub.users import repository as users_repo
from streamhub.videos import repository as videos_repo

router = APIRouter(prefix="/api/comments", tags=["comments"])

COMMENT_NOT_FOUND = "Comment not found"


async def _get_comment_or_404(db: AsyncSession, comment_id: int):
    c = await repo.get_comment(db, comment_id)
    if not c:
        raise HTTPException(status_code=404, detail=COMMENT_NOT_FOUND)
    return c


async def _single_out(db: AsyncSession, c) -> dict:
    author = await users_repo.get_by_id(db, c.user_id)
    return svc.comment_dict(c, author)


@router.get("", response_model=CommentPage)
async def list_comments(
    video_id: int | None = Query(None, alias="videoId"),
    user_id: int | None = Query(None, alias="userId"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    skip = (page - 1) * limit
    comments = await repo.list_comments(
        db, video_id=video_id, user_id=user_id, skip=skip, limit=limit
    )
    total = await repo.count_comments(db, video_id=video_id, user_id=user_id)
    return {
        "comments": await svc.hydrate_comments(db, comments),
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit),
    }


# 🌳 hilos anidados de un video
@router.get("/video/{video_id}", response_model=List[CommentOut])
async def comments_for_video(
    video_id: int,
    db: AsyncSession = Depends(get_session),
):
    return await svc.nested_for_video(db, video_id)


@router.get("/{comment_id}", response_model=CommentOut)
async def get_one(
    comment_id: int,
    db: AsyncSession = Depends(get_session),
):
    c = await _get_comment_or_404(db, comment_id)
    return await _single_out(db, c)


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    payload: CommentCreate,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    video = await videos_repo.get_video(db, payload.video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")

    author = await users_repo.get_by_id(db, user_id)
    if not author:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        c = await svc.create_comment(
            db,
            video=video,
            author=author,
            content=payload.content,
            parent_id=payload.parent_id,
        )
    except svc.ParentCommentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # comentario + notificación en el mismo commit
    await db.commit()
    return svc.comment_dict(c, author)


@router.put("/{comment_id}", response_model=CommentOut)
async def update_comment_endpoint(
    comment_id: int,
    payload: CommentUpdate,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    c = await _get_comment_or_404(db, comment_id)
    if c.user_id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized")

    if payload.content is not None:
        c.content = payload.content
    await db.flush()
    await db.commit()
    return await _single_out(db, c)


@router.delete("/{comment_id}", response_model=MessageOut)
async def delete_comment_endpoint(
    comment_id: int,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    c = await _get_comment_or_404(db, comment_id)
    if c.user_id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized")

    await repo.delete_comment(db, c)
    await db.commit()
    return {"message": "Comment deleted successfully"}
