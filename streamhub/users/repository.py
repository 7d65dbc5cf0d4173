# streamhub/users/repository.py
from datetime import datetime, timezone

from sqlalchemy import select, func, delete, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.db.ops import set_add, set_remove, set_toggle
from streamhub.users.models import User, Subscription, WatchHistoryEntry, WatchLaterEntry
from streamhub.notifications.models import Notification
from streamhub.videos.models import Video, VideoLike, VideoView


async def get_by_username(db: AsyncSession, username: str) -> User | None:
    res = await db.execute(select(User).where(User.username == username))
    return res.scalar_one_or_none()


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_many(db: AsyncSession, user_ids: set[int] | list[int]) -> dict[int, User]:
    if not user_ids:
        return {}
    res = await db.execute(select(User).where(User.id.in_(list(user_ids))))
    return {u.id: u for u in res.scalars()}


async def list_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> list[User]:
    res = await db.execute(select(User).order_by(User.id.asc()).offset(skip).limit(limit))
    return list(res.scalars())


async def create_user(
    db: AsyncSession,
    *,
    username: str,
    email: str,
    hashed_password: str,
    channel_name: str | None = None,
    profile_picture: str | None = None,
) -> User:
    user = User(
        username=username,
        email=email,
        hashed_password=hashed_password,
        channel_name=channel_name,
        profile_picture=profile_picture,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    """
    Borra la cuenta y todo lo que es SUYO como miembro de un set: suscripciones
    (en ambos sentidos), historial, ver más tarde, avisos, likes y vistas.
    Se hace a mano y no solo por FK: likes/vistas no tienen FK a users y en
    sqlite la cascada depende del PRAGMA de la conexión.
    Sus videos y comentarios quedan.
    """
    uid = user.id
    await db.execute(
        delete(Subscription).where(
            or_(Subscription.channel_id == uid, Subscription.subscriber_id == uid)
        )
    )
    for model in (WatchHistoryEntry, WatchLaterEntry, Notification, VideoLike, VideoView):
        await db.execute(delete(model).where(model.user_id == uid))
    await db.delete(user)
    await db.flush()


# -------------------------
# 🔔 SUSCRIPCIONES
# -------------------------
async def toggle_subscription(
    db: AsyncSession,
    channel_id: int,
    subscriber_id: int,
) -> tuple[bool, bool]:
    """
    Devuelve (subscribed, added): added=True solo si ESTA llamada suscribió.
    """
    return await set_toggle(
        db, Subscription, channel_id=channel_id, subscriber_id=subscriber_id
    )


async def count_subscribers(db: AsyncSession, channel_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Subscription).where(Subscription.channel_id == channel_id)
    )
    return int(res.scalar_one() or 0)


async def list_subscriber_ids(db: AsyncSession, channel_id: int) -> list[int]:
    res = await db.execute(
        select(Subscription.subscriber_id)
        .where(Subscription.channel_id == channel_id)
        .order_by(Subscription.id.asc())
    )
    return [row[0] for row in res.all()]


async def list_subscribers(db: AsyncSession, channel_id: int) -> list[User]:
    res = await db.execute(
        select(User)
        .join(Subscription, Subscription.subscriber_id == User.id)
        .where(Subscription.channel_id == channel_id)
        .order_by(Subscription.id.asc())
    )
    return list(res.scalars())


async def list_subscribed_channels(db: AsyncSession, subscriber_id: int) -> list[User]:
    res = await db.execute(
        select(User)
        .join(Subscription, Subscription.channel_id == User.id)
        .where(Subscription.subscriber_id == subscriber_id)
        .order_by(Subscription.id.asc())
    )
    return list(res.scalars())


# -------------------------
# 🕘 HISTORIAL
# -------------------------
async def record_watch(
    db: AsyncSession,
    user_id: int,
    video_id: int,
    limit: int = 100,
) -> None:
    """
    Más reciente primero, sin duplicados y como mucho `limit` entradas:
    1) borra la entrada previa de ese video (si había)
    2) inserta una nueva con la hora actual
    3) recorta la cola
    """
    await db.execute(
        delete(WatchHistoryEntry).where(
            WatchHistoryEntry.user_id == user_id,
            WatchHistoryEntry.video_id == video_id,
        )
    )
    db.add(
        WatchHistoryEntry(
            user_id=user_id,
            video_id=video_id,
            watched_at=datetime.now(timezone.utc),
        )
    )
    await db.flush()

    keep = (
        select(WatchHistoryEntry.id)
        .where(WatchHistoryEntry.user_id == user_id)
        .order_by(desc(WatchHistoryEntry.watched_at), desc(WatchHistoryEntry.id))
        .limit(limit)
    )
    await db.execute(
        delete(WatchHistoryEntry).where(
            WatchHistoryEntry.user_id == user_id,
            WatchHistoryEntry.id.not_in(keep.scalar_subquery()),
        )
    )


async def list_history(db: AsyncSession, user_id: int) -> list[tuple[WatchHistoryEntry, Video]]:
    """
    Filas (entrada, video) más reciente primero.
    Las entradas cuyo video ya no existe no salen (inner join).
    """
    res = await db.execute(
        select(WatchHistoryEntry, Video)
        .join(Video, Video.id == WatchHistoryEntry.video_id)
        .where(WatchHistoryEntry.user_id == user_id)
        .order_by(desc(WatchHistoryEntry.watched_at), desc(WatchHistoryEntry.id))
    )
    return [(entry, video) for entry, video in res.all()]


# -------------------------
# ⏰ VER MÁS TARDE
# -------------------------
async def add_watch_later(db: AsyncSession, user_id: int, video_id: int) -> bool:
    return await set_add(
        db,
        WatchLaterEntry,
        user_id=user_id,
        video_id=video_id,
        added_at=datetime.now(timezone.utc),
    )


async def remove_watch_later(db: AsyncSession, user_id: int, video_id: int) -> bool:
    return await set_remove(db, WatchLaterEntry, user_id=user_id, video_id=video_id)


async def list_watch_later(db: AsyncSession, user_id: int) -> list[Video]:
    # lo último agregado va primero
    res = await db.execute(
        select(Video)
        .join(WatchLaterEntry, WatchLaterEntry.video_id == Video.id)
        .where(WatchLaterEntry.user_id == user_id)
        .order_by(desc(WatchLaterEntry.added_at), desc(WatchLaterEntry.id))
    )
    return list(res.scalars())
