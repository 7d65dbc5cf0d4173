# streamhub/users/service.py
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import Settings
from streamhub.core.security import hash_password, create_access_token, verify_password
from streamhub.notifications.service import notify, subscribe_message, profile_link
from streamhub.users import repository as repo
from streamhub.users.models import User
from streamhub.users.schemas import UserCreate, UserOut, UserMini, UserProfileOut

MIN_PASSWORD_LENGTH = 6


async def register_user(db: AsyncSession, data: UserCreate, settings: Settings) -> User:
    if await repo.get_by_username(db, data.username):
        raise ValueError("Username already exists")
    if await repo.get_by_email(db, data.email):
        raise ValueError("Email already exists")

    # el commit lo hace el router
    return await repo.create_user(
        db,
        username=data.username,
        email=data.email,
        hashed_password=hash_password(data.password),
        channel_name=data.channel_name,
        profile_picture=data.profile_picture or settings.DEFAULT_AVATAR_URL,
    )


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await repo.get_by_email(db, (email or "").strip().lower())
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(sub=str(user.id), settings=settings)


async def user_out(db: AsyncSession, user: User) -> UserOut:
    count = await repo.count_subscribers(db, user.id)
    return UserOut.model_validate(user).model_copy(update={"subscribers_count": count})


async def profile_out(db: AsyncSession, user: User) -> UserProfileOut:
    subs = await repo.list_subscribers(db, user.id)
    base = UserOut.model_validate(user).model_dump()
    base["subscribers_count"] = len(subs)
    base["subscribers"] = [UserMini.model_validate(s) for s in subs]
    return UserProfileOut(**base)


async def update_user(
    db: AsyncSession,
    user: User,
    *,
    username: str | None = None,
    channel_name: str | None = None,
    password: str | None = None,
    profile_picture: str | None = None,
) -> User:
    """
    Solo toca lo que llega. La contraseña se re-hashea únicamente si viene
    una nueva en texto plano con el largo mínimo; si no, el hash queda igual.
    """
    if username:
        username = username.strip()
        if username != user.username:
            other = await repo.get_by_username(db, username)
            if other and other.id != user.id:
                raise ValueError("Username already exists")
            user.username = username
    if channel_name:
        user.channel_name = channel_name.strip()
    if profile_picture:
        user.profile_picture = profile_picture
    if password and len(password) >= MIN_PASSWORD_LENGTH:
        user.hashed_password = hash_password(password)

    await db.flush()
    # updated_at lo pone la DB: hay que recargar antes de serializar
    await db.refresh(user)
    return user


async def toggle_subscription(
    db: AsyncSession,
    *,
    channel: User,
    subscriber: User,
) -> tuple[bool, int]:
    """
    Devuelve (subscribed, subscribers_count).
    Solo la transición ausente → presente avisa al dueño del canal.
    """
    subscribed, added = await repo.toggle_subscription(db, channel.id, subscriber.id)
    if added:
        await notify(
            db,
            recipient_id=channel.id,
            actor_id=subscriber.id,
            message=subscribe_message(subscriber.username),
            link=profile_link(subscriber.id),
        )
    count = await repo.count_subscribers(db, channel.id)
    return subscribed, count
