# streamhub/auth/router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.auth.schemas import SignInRequest, AuthOut
from streamhub.core.config import Settings
from streamhub.core.deps import get_settings
from streamhub.db.session import get_session
from streamhub.media.storage import save_upload, delete_media, is_image, AVATARS_SUBDIR
from streamhub.users import service as svc
from streamhub.users.schemas import UserCreate

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthOut)
async def signup(
    username: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    channel_name: str | None = Form(None, alias="channelName"),
    profile_picture: UploadFile | None = File(None, alias="profilePicture"),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    multipart/form-data con:
    - username, email, password
    - channelName (opcional)
    - profilePicture (archivo opcional)
    """
    # valida antes de tocar el media host (ValidationError → 400)
    data = UserCreate(
        username=username,
        email=email,
        password=password,
        channel_name=channel_name,
    )

    if profile_picture is not None and profile_picture.filename:
        if not is_image(profile_picture):
            raise HTTPException(status_code=400, detail="profilePicture: unsupported file type")
        data.profile_picture = save_upload(profile_picture, settings, AVATARS_SUBDIR)

    try:
        user = await svc.register_user(db, data, settings)
        await db.commit()
    except ValueError as e:
        # cuenta rechazada: el avatar ya guardado queda sin dueño
        delete_media(data.profile_picture, settings)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        delete_media(data.profile_picture, settings)
        raise

    log.info(f"👤 Nueva cuenta: {user.username} (id={user.id})")
    return {"user": await svc.user_out(db, user), "token": svc.issue_token(user, settings)}


@router.post("/signin", response_model=AuthOut)
async def signin(
    payload: SignInRequest,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user = await svc.authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    return {"user": await svc.user_out(db, user), "token": svc.issue_token(user, settings)}
