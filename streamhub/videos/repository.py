# streamhub/videos/repository.py
from collections import defaultdict

from sqlalchemy import select, desc, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.db.ops import set_add, set_toggle
from streamhub.users.models import User
from streamhub.videos.models import Video, VideoLike, VideoView


# -------------------------
# VIDEOS
# -------------------------
async def create_video(
    db: AsyncSession,
    *,
    owner_id: int,
    title: str,
    description: str,
    video_url: str,
    thumbnail_url: str | None,
    duration: float,
    tags: list[str] | None = None,
) -> Video:
    video = Video(
        owner_id=owner_id,
        title=title,
        description=description,
        video_url=video_url,
        thumbnail_url=thumbnail_url,
        duration=duration,
        tags=tags or [],
        views=0,
    )
    db.add(video)
    await db.flush()
    await db.refresh(video)
    return video


async def get_video(db: AsyncSession, video_id: int) -> Video | None:
    res = await db.execute(select(Video).where(Video.id == video_id))
    return res.scalar_one_or_none()


async def list_videos(
    db: AsyncSession,
    owner_id: int | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Video]:
    q = select(Video)
    if owner_id is not None:
        q = q.where(Video.owner_id == owner_id)
    q = q.order_by(desc(Video.created_at), desc(Video.id)).offset(skip).limit(limit)
    res = await db.execute(q)
    return list(res.scalars())


async def list_by_owners(db: AsyncSession, owner_ids: list[int]) -> list[Video]:
    if not owner_ids:
        return []
    res = await db.execute(
        select(Video)
        .where(Video.owner_id.in_(owner_ids))
        .order_by(desc(Video.created_at), desc(Video.id))
    )
    return list(res.scalars())


async def search_by_title(db: AsyncSession, q: str) -> list[Video]:
    res = await db.execute(
        select(Video)
        .where(Video.title.icontains(q, autoescape=True))
        .order_by(Video.id.asc())
    )
    return list(res.scalars())


async def search_by_channel(db: AsyncSession, q: str) -> list[Video]:
    res = await db.execute(
        select(Video)
        .join(User, User.id == Video.owner_id)
        .where(User.channel_name.icontains(q, autoescape=True))
        .order_by(Video.id.asc())
    )
    return list(res.scalars())


async def delete_video(db: AsyncSession, video: Video) -> None:
    await db.delete(video)
    await db.flush()


# -------------------------
# 👍 LIKES
# -------------------------
async def toggle_like(db: AsyncSession, video_id: int, user_id: int) -> tuple[bool, bool]:
    """Devuelve (liked, added)."""
    return await set_toggle(db, VideoLike, video_id=video_id, user_id=user_id)


async def count_likes(db: AsyncSession, video_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(VideoLike).where(VideoLike.video_id == video_id)
    )
    return int(res.scalar_one() or 0)


async def like_user_ids(db: AsyncSession, video_ids: list[int]) -> dict[int, list[int]]:
    """video_id → [user_id, ...] en orden de like."""
    out: dict[int, list[int]] = defaultdict(list)
    if not video_ids:
        return out
    res = await db.execute(
        select(VideoLike.video_id, VideoLike.user_id)
        .where(VideoLike.video_id.in_(video_ids))
        .order_by(VideoLike.id.asc())
    )
    for video_id, user_id in res.all():
        out[video_id].append(user_id)
    return out


async def list_liked_by(db: AsyncSession, user_id: int) -> list[Video]:
    res = await db.execute(
        select(Video)
        .join(VideoLike, VideoLike.video_id == Video.id)
        .where(VideoLike.user_id == user_id)
        .order_by(desc(VideoLike.id))
    )
    return list(res.scalars())


# -------------------------
# 👁️ VISTAS
# -------------------------
async def record_view(db: AsyncSession, video_id: int, user_id: int) -> int:
    """
    Suma 1 al contador solo la primera vez que ese usuario lo ve.
    La marca en video_views y el +1 van en sentencias atómicas, sin leer antes.
    Devuelve el contador actual.
    """
    if await set_add(db, VideoView, video_id=video_id, user_id=user_id):
        conn = await db.connection()
        await conn.execute(
            update(Video.__table__)
            .where(Video.__table__.c.id == video_id)
            .values(views=Video.__table__.c.views + 1)
        )
    res = await db.execute(select(Video.views).where(Video.id == video_id))
    return int(res.scalar_one() or 0)
