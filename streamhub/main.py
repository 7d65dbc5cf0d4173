# streamhub/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from streamhub.core.config import Settings, settings as env_settings
from streamhub.core.errors import register_error_handlers
from streamhub.core.json import UTF8JSONResponse
from streamhub.db.init_db import init_models
from streamhub.db.session import Database
from streamhub.media.storage import ensure_media_dirs

# routers
from streamhub.auth.router import router as auth_router
from streamhub.users.router import router as users_router
from streamhub.notifications.router import router as notifications_router
from streamhub.videos.router import router as videos_router
from streamhub.comments.router import router as comments_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("🚀 Iniciando servicio…")
    database = Database(app.state.settings.DATABASE_URL)
    app.state.db = database
    try:
        await init_models(database)
        log.info("✅ Startup listo.")
        yield
    finally:
        await database.dispose()
        log.info("👋 Pool de DB cerrado.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or env_settings

    app = FastAPI(
        title="StreamHub API",
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # media host local: solo lectura
    ensure_media_dirs(settings)
    app.mount(
        settings.MEDIA_URL.rstrip("/"),
        StaticFiles(directory=settings.MEDIA_DIR, html=False),
        name="media",
    )

    @app.get("/api/health")
    async def health():
        return {"ok": True, "service": "streamhub"}

    # routers
    app.include_router(auth_router)           # /api/auth/...
    app.include_router(notifications_router)  # /api/users/me/notifications/...
    app.include_router(users_router)          # /api/users/...
    app.include_router(videos_router)         # /api/videos/...
    app.include_router(comments_router)       # /api/comments/...

    return app


app = create_app()
