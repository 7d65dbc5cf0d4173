# streamhub/db/init_db.py
import logging

from streamhub.db.base import Base
from streamhub.db.session import Database

# 👇 importa todos los modelos que deben existir en la DB
from streamhub.users.models import User, Subscription, WatchHistoryEntry, WatchLaterEntry  # noqa: F401
from streamhub.videos.models import Video, VideoLike, VideoView  # noqa: F401
from streamhub.comments.models import Comment  # noqa: F401
from streamhub.notifications.models import Notification  # noqa: F401

log = logging.getLogger("uvicorn")


async def init_models(database: Database) -> None:
    """
    Crea/verifica todas las tablas declaradas en Base.metadata.
    Si la DB no está, el arranque falla: no tiene sentido servir sin storage.
    """
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("✅ DB init: tablas creadas/verificadas.")
