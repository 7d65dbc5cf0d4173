# streamhub/comments/repository.py
from __future__ import annotations

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.comments.models import Comment


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    username: str,
    video_id: int,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    c = Comment(
        user_id=user_id,
        username=username,
        video_id=video_id,
        content=content,
        parent_id=parent_id,
    )
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def list_video_comments(db: AsyncSession, video_id: int) -> list[Comment]:
    # TODOS los de ese video, más viejos primero (id para desempatar)
    res = await db.execute(
        select(Comment)
        .where(Comment.video_id == video_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return list(res.scalars())


def _filtered(video_id: int | None, user_id: int | None):
    conds = []
    if video_id is not None:
        conds.append(Comment.video_id == video_id)
    if user_id is not None:
        conds.append(Comment.user_id == user_id)
    return conds


async def list_comments(
    db: AsyncSession,
    *,
    video_id: int | None = None,
    user_id: int | None = None,
    skip: int = 0,
    limit: int = 10,
) -> list[Comment]:
    res = await db.execute(
        select(Comment)
        .where(*_filtered(video_id, user_id))
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .offset(skip)
        .limit(limit)
    )
    return list(res.scalars())


async def count_comments(
    db: AsyncSession,
    *,
    video_id: int | None = None,
    user_id: int | None = None,
) -> int:
    res = await db.execute(
        select(func.count()).select_from(Comment).where(*_filtered(video_id, user_id))
    )
    return int(res.scalar_one() or 0)


async def delete_comment(db: AsyncSession, comment: Comment) -> None:
    # las respuestas quedan: se vuelven huérfanas
    await db.delete(comment)
    await db.flush()
