# streamhub/videos/service.py
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.notifications.service import notify, like_message, watch_link
from streamhub.users import repository as users_repo
from streamhub.users.models import User
from streamhub.users.schemas import UserMini
from streamhub.videos import repository as repo
from streamhub.videos.models import Video
from streamhub.videos.schemas import VideoOut, VideoDetailOut, OwnerDetail


def parse_tags(raw: str | list[str] | None) -> list[str]:
    """Acepta "a, b ,c" o ["a", " b"]; limpia espacios y vacíos."""
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    return [t.strip() for t in items if isinstance(t, str) and t.strip()]


def parse_channel_ids(raw: str | None) -> list[int]:
    # ids no numéricos se ignoran
    out: list[int] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if part.isdigit():
            out.append(int(part))
    return out


def _video_dict(video: Video, likes: list[int], owner: User | None) -> dict:
    return {
        "id": video.id,
        "title": video.title,
        "description": video.description,
        "video_url": video.video_url,
        "thumbnail_url": video.thumbnail_url,
        "owner_id": video.owner_id,
        "owner": UserMini.model_validate(owner) if owner else None,
        "views": video.views or 0,
        "likes": [str(uid) for uid in likes],
        "likes_count": len(likes),
        "duration": video.duration,
        "tags": video.tags or [],
        "created_at": video.created_at,
        "updated_at": video.updated_at,
    }


async def hydrate_videos(db: AsyncSession, videos: list[Video]) -> list[VideoOut]:
    """
    Proyección de una lista de videos con dueño y likes, en 2 queries extra
    (no una por video).
    """
    if not videos:
        return []
    ids = [v.id for v in videos]
    likes = await repo.like_user_ids(db, ids)
    owners = await users_repo.get_many(db, {v.owner_id for v in videos})
    return [
        VideoOut(**_video_dict(v, likes.get(v.id, []), owners.get(v.owner_id)))
        for v in videos
    ]


async def hydrate_video_detail(db: AsyncSession, video: Video) -> VideoDetailOut:
    likes = await repo.like_user_ids(db, [video.id])
    owner = await users_repo.get_by_id(db, video.owner_id)
    data = _video_dict(video, likes.get(video.id, []), None)
    if owner:
        subscriber_ids = await users_repo.list_subscriber_ids(db, owner.id)
        data["owner"] = OwnerDetail(
            **UserMini.model_validate(owner).model_dump(),
            subscribers=[str(s) for s in subscriber_ids],
        )
    return VideoDetailOut(**data)


async def search_videos(db: AsyncSession, q: str) -> list[Video]:
    """
    Coincidencias por título (sin mayúsculas/minúsculas) y, por separado,
    por nombre de canal del dueño. Unión sin repetidos: primero las de título.
    """
    by_title = await repo.search_by_title(db, q)
    by_channel = await repo.search_by_channel(db, q)

    seen = {v.id for v in by_title}
    results = list(by_title)
    for v in by_channel:
        if v.id not in seen:
            seen.add(v.id)
            results.append(v)
    return results


async def toggle_like(
    db: AsyncSession,
    *,
    video: Video,
    actor: User,
) -> tuple[bool, int]:
    """
    Devuelve (liked, likes_count). Solo ausente → presente notifica al dueño,
    y nunca si el dueño se da like a sí mismo.
    """
    liked, added = await repo.toggle_like(db, video.id, actor.id)
    if added:
        await notify(
            db,
            recipient_id=video.owner_id,
            actor_id=actor.id,
            message=like_message(actor.username, video.title),
            link=watch_link(video.id),
        )
    count = await repo.count_likes(db, video.id)
    return liked, count
