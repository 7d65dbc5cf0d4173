# streamhub/users/router.py
from typing import List

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    UploadFile,
    File,
    Form,
    status,
)
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import Settings
from streamhub.core.deps import get_current_user_id, get_settings
from streamhub.core.schemas import MessageOut
from streamhub.db.session import get_session
from streamhub.media.storage import save_upload, delete_media, is_image, AVATARS_SUBDIR
from streamhub.users import repository as repo
from streamhub.users import service as svc
from streamhub.users.schemas import (
    UserCreate,
    UserOut,
    UserMini,
    UserProfileOut,
    UserUpdateOut,
    SubscribeOut,
    WatchLaterOut,
)
from streamhub.videos import repository as videos_repo
from streamhub.videos.schemas import VideoOut, HistoryEntryOut
from streamhub.videos.service import hydrate_videos

router = APIRouter(prefix="/api/users", tags=["users"])

USER_NOT_FOUND = "User not found"


async def _get_user_or_404(db: AsyncSession, user_id: int):
    user = await repo.get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    return user


@router.get("", response_model=List[UserOut])
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_session),
):
    users = await repo.list_users(db, skip=skip, limit=limit)
    return [await svc.user_out(db, u) for u in users]


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    try:
        user = await svc.register_user(db, payload, settings)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    await db.commit()
    return await svc.user_out(db, user)


# ---------- /me/... va ANTES de /{user_id} ----------
@router.get("/me", response_model=UserOut)
async def me(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    user = await _get_user_or_404(db, user_id)
    return await svc.user_out(db, user)


@router.get("/subscriptions", response_model=List[UserMini])
async def my_subscriptions(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return await repo.list_subscribed_channels(db, user_id)


@router.get("/me/history", response_model=List[HistoryEntryOut])
async def my_history(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await _get_user_or_404(db, user_id)
    rows = await repo.list_history(db, user_id)
    videos = await hydrate_videos(db, [video for _, video in rows])
    return [
        {"video": v, "watched_at": entry.watched_at}
        for (entry, _), v in zip(rows, videos)
    ]


@router.get("/me/liked-videos", response_model=List[VideoOut])
async def my_liked_videos(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    videos = await videos_repo.list_liked_by(db, user_id)
    return await hydrate_videos(db, videos)


@router.post("/me/watch-later/{video_id}", response_model=WatchLaterOut)
async def add_watch_later(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    if not await videos_repo.get_video(db, video_id):
        raise HTTPException(status_code=404, detail="Video not found")
    await _get_user_or_404(db, user_id)
    # idempotente: si ya estaba, no se duplica ni se mueve
    await repo.add_watch_later(db, user_id, video_id)
    await db.commit()
    return WatchLaterOut(saved=True)


@router.delete("/me/watch-later/{video_id}", response_model=WatchLaterOut)
async def remove_watch_later(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await repo.remove_watch_later(db, user_id, video_id)
    await db.commit()
    return WatchLaterOut(saved=False)


@router.get("/me/watch-later", response_model=List[VideoOut])
async def my_watch_later(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await _get_user_or_404(db, user_id)
    videos = await repo.list_watch_later(db, user_id)
    return await hydrate_videos(db, videos)


# ---------- perfil público / edición ----------
@router.get("/{user_id}", response_model=UserProfileOut)
async def get_profile(
    user_id: int,
    db: AsyncSession = Depends(get_session),
):
    user = await _get_user_or_404(db, user_id)
    return await svc.profile_out(db, user)


@router.put("/{user_id}", response_model=UserUpdateOut)
async def update_profile(
    user_id: int,
    username: str | None = Form(None),
    channel_name: str | None = Form(None, alias="channelName"),
    password: str | None = Form(None),
    profile_picture: UploadFile | None = File(None, alias="profilePicture"),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    current_id: int = Depends(get_current_user_id),
):
    if current_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    user = await _get_user_or_404(db, user_id)

    avatar_url = None
    if profile_picture is not None and profile_picture.filename:
        if not is_image(profile_picture):
            raise HTTPException(status_code=400, detail="profilePicture: unsupported file type")
        avatar_url = save_upload(profile_picture, settings, AVATARS_SUBDIR)

    try:
        user = await svc.update_user(
            db,
            user,
            username=username,
            channel_name=channel_name,
            password=password,
            profile_picture=avatar_url,
        )
    except ValueError as e:
        delete_media(avatar_url, settings)
        raise HTTPException(status_code=400, detail=str(e))
    await db.commit()
    return {"user": await svc.user_out(db, user)}


@router.delete("/{user_id}", response_model=MessageOut)
async def delete_account(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    current_id: int = Depends(get_current_user_id),
):
    """
    Solo la propia cuenta. Sus videos y comentarios NO se borran.
    """
    # primero la propiedad: así no se puede sondear qué ids existen
    if current_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    user = await _get_user_or_404(db, user_id)
    await repo.delete_user(db, user)
    await db.commit()
    return {"message": "User deleted successfully"}


@router.post("/{user_id}/subscribe", response_model=SubscribeOut)
async def subscribe(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    current_id: int = Depends(get_current_user_id),
):
    channel = await _get_user_or_404(db, user_id)
    subscriber = await _get_user_or_404(db, current_id)

    subscribed, count = await svc.toggle_subscription(
        db, channel=channel, subscriber=subscriber
    )
    # suscripción + notificación en el mismo commit
    await db.commit()
    return SubscribeOut(subscribed=subscribed, subscribers_count=count)
