# streamhub/notifications/repository.py
from sqlalchemy import select, update, desc
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.notifications.models import Notification


async def create_notification(
    db: AsyncSession,
    *,
    user_id: int,
    message: str,
    link: str | None = None,
) -> Notification:
    n = Notification(user_id=user_id, message=message, link=link, read=False)
    db.add(n)
    await db.flush()
    return n


async def list_for_user(db: AsyncSession, user_id: int, limit: int = 20) -> list[Notification]:
    res = await db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(desc(Notification.created_at), desc(Notification.id))
        .limit(limit)
    )
    return list(res.scalars())


async def mark_all_read(db: AsyncSession, user_id: int) -> int:
    """Marca como leídas todas las no leídas del usuario. Devuelve cuántas cambió."""
    res = await db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    return res.rowcount or 0
