# streamhub/notifications/service.py
"""
Efectos colaterales de las escrituras: avisos al dueño del contenido.

Se agregan a la MISMA sesión que la mutación principal, así el commit del
handler guarda ambas cosas juntas (o ninguna).
"""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.notifications.models import Notification
from streamhub.notifications.repository import create_notification
from streamhub.users.models import User


async def notify(
    db: AsyncSession,
    *,
    recipient_id: int,
    actor_id: int,
    message: str,
    link: str | None = None,
) -> Notification | None:
    # nadie recibe avisos de sus propias acciones
    if recipient_id == actor_id:
        return None
    # los videos sobreviven a su dueño: sin cuenta no hay a quién avisar
    if await db.get(User, recipient_id) is None:
        return None
    return await create_notification(db, user_id=recipient_id, message=message, link=link)


def comment_message(actor: str, video_title: str) -> str:
    return f'{actor} commented on your video "{video_title}"'


def like_message(actor: str, video_title: str) -> str:
    return f'{actor} liked your video "{video_title}"'


def subscribe_message(actor: str) -> str:
    return f"{actor} subscribed to your channel"


def watch_link(video_id: int) -> str:
    return f"/watch/{video_id}"


def profile_link(user_id: int) -> str:
    return f"/profile/{user_id}"
