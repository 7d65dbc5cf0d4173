# streamhub/notifications/router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import Settings
from streamhub.core.deps import get_current_user_id, get_settings
from streamhub.core.schemas import SuccessOut
from streamhub.db.session import get_session
from streamhub.notifications import repository as repo
from streamhub.notifications.schemas import NotificationOut

router = APIRouter(prefix="/api/users/me/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationOut])
async def my_notifications(
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    return await repo.list_for_user(db, user_id, limit=settings.NOTIFICATIONS_LIMIT)


@router.post("/mark-read", response_model=SuccessOut)
async def mark_read(
    db: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    await repo.mark_all_read(db, user_id)
    await db.commit()
    return {"success": True}
