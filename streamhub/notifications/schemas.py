# streamhub/notifications/schemas.py
from datetime import datetime

from streamhub.core.schemas import CamelModel


class NotificationOut(CamelModel):
    id: int
    user_id: int
    message: str
    link: str | None = None
    read: bool
    created_at: datetime
