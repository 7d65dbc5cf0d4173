# streamhub/videos/router.py
import math
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
from streamhub.core.schemas import MessageOut, SuccessOut
from streamhub.db.session import get_session
from streamhub.media.storage import (
    save_upload,
    delete_media,
    is_video,
    is_image,
    VIDEOS_SUBDIR,
    THUMBNAILS_SUBDIR,
)
from streamhub.users import repository as users_repo
from streamhub.videos import repository as repo
from streamhub.videos import service as svc
from streamhub.videos.schemas import (
    VideoOut,
    VideoDetailOut,
    VideoUpdate,
    LikeOut,
    ViewOut,
)

router = APIRouter(prefix="/api/videos", tags=["videos"])

VIDEO_NOT_FOUND = "Video not found"


async def _get_video_or_404(db: AsyncSession, video_id: int):
    video = await repo.get_video(db, video_id)
    if not video:
        raise HTTPException(status_code=404, detail=VIDEO_NOT_FOUND)
    return video


async def _get_user_or_404(db: AsyncSession, user_id: int):
    user = await users_repo.get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ⚠️ /search y /by-channels van ANTES de /{video_id}
@router.get("/search", response_model=List[VideoOut])
async def search(
    q: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    videos = await svc.search_videos(db, q.strip())
    return await svc.hydrate_videos(db, videos)


@router.get("/by-channels", response_model=List[VideoOut])
async def by_channels(
    ids: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    owner_ids = svc.parse_channel_ids(ids)
    if not owner_ids:
        return []
    videos = await repo.list_by_owners(db, owner_ids)
    return await svc.hydrate_videos(db, videos)


@router.get("/{video_id}", response_model=VideoDetailOut)
async def get_one(
    video_id: int,
    db: AsyncSession = Depends(get_session),
):
    video = await _get_video_or_404(db, video_id)
    return await svc.hydrate_video_detail(db, video)


@router.get("", response_model=List[VideoOut])
async def list_all(
    user_id: int | None = Query(None, alias="userId"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_session),
):
    videos = await repo.list_videos(db, owner_id=user_id, skip=skip, limit=limit)
    return await svc.hydrate_videos(db, videos)


@router.post("", response_model=VideoOut, status_code=status.HTTP_201_CREATED)
async def publish(
    title: str = Form(...),
    description: str = Form(...),
    duration: float = Form(...),
    tags: str | None = Form(None),
    video: UploadFile = File(...),
    thumbnail: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    """
    Subida multipart: archivo `video` (obligatorio) + `thumbnail` (opcional).
    Al media host van los bytes; aquí solo guardamos la referencia.
    """
    title = title.strip()
    description = description.strip()
    if not title:
        raise HTTPException(status_code=400, detail="title: Field required")
    if not description:
        raise HTTPException(status_code=400, detail="description: Field required")
    # inf/nan pasan el parseo de float pero no se pueden devolver en JSON
    if not math.isfinite(duration) or duration < 0:
        raise HTTPException(status_code=400, detail="duration: must be a non-negative number")
    if not is_video(video):
        raise HTTPException(status_code=400, detail="video: unsupported file type")
    if thumbnail is not None and thumbnail.filename and not is_image(thumbnail):
        raise HTTPException(status_code=400, detail="thumbnail: unsupported file type")

    video_url = save_upload(video, settings, VIDEOS_SUBDIR)
    thumbnail_url = settings.DEFAULT_THUMBNAIL_URL
    if thumbnail is not None and thumbnail.filename:
        thumbnail_url = save_upload(thumbnail, settings, THUMBNAILS_SUBDIR)

    try:
        created = await repo.create_video(
            db,
            owner_id=user_id,
            title=title,
            description=description,
            video_url=video_url,
            thumbnail_url=thumbnail_url,
            duration=duration,
            tags=svc.parse_tags(tags),
        )
        await db.commit()
    except Exception:
        # sin fila no hay quien referencie los archivos
        delete_media(video_url, settings)
        delete_media(thumbnail_url, settings)
        raise
    out = await svc.hydrate_videos(db, [created])
    return out[0]


@router.post("/{video_id}/like", response_model=LikeOut)
async def like(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    video = await _get_video_or_404(db, video_id)
    actor = await _get_user_or_404(db, user_id)

    liked, count = await svc.toggle_like(db, video=video, actor=actor)
    # like + notificación en el mismo commit
    await db.commit()
    return LikeOut(liked=liked, likes_count=count)


@router.put("/{video_id}", response_model=VideoOut)
async def edit(
    video_id: int,
    body: VideoUpdate,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    video = await _get_video_or_404(db, video_id)
    if video.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    if body.title:
        video.title = body.title
    if body.description:
        video.description = body.description
    if body.tags is not None:
        video.tags = svc.parse_tags(body.tags)

    await db.flush()
    await db.commit()
    await db.refresh(video)
    out = await svc.hydrate_videos(db, [video])
    return out[0]


@router.delete("/{video_id}", response_model=MessageOut)
async def remove(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    """
    Solo el dueño. Los comentarios del video NO se borran.
    """
    video = await _get_video_or_404(db, video_id)
    if video.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    video_url, thumbnail_url = video.video_url, video.thumbnail_url
    await repo.delete_video(db, video)
    await db.commit()

    # best-effort: los archivos en el media host
    delete_media(video_url, settings)
    delete_media(thumbnail_url, settings)
    return {"message": "Video deleted"}


@router.post("/{video_id}/view", response_model=ViewOut)
async def view(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await _get_video_or_404(db, video_id)
    views = await repo.record_view(db, video_id, user_id)
    await db.commit()
    return ViewOut(views=views)


@router.post("/{video_id}/history", response_model=SuccessOut)
async def add_history(
    video_id: int,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    await _get_video_or_404(db, video_id)
    await _get_user_or_404(db, user_id)
    await users_repo.record_watch(db, user_id, video_id, limit=settings.WATCH_HISTORY_LIMIT)
    await db.commit()
    return {"success": True}
