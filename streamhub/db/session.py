# streamhub/db/session.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _engine_kwargs(db_url: str) -> dict:
    # Timeouts cortos: si la DB no responde → falla rápido (5s)
    if db_url.startswith("postgresql+asyncpg"):
        return {
            "pool_size": 5,
            "max_overflow": 10,
            "connect_args": {
                "timeout": 5,
                "server_settings": {"client_encoding": "UTF8"},
            },
        }
    if db_url.startswith("sqlite+aiosqlite"):
        # sqlite no admite pool_size/max_overflow en todos los modos
        return {"connect_args": {"timeout": 5}}
    return {}


def _sqlite_enable_fks(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Pool de conexiones del proceso.

    Se crea una vez al arrancar la app (lifespan), se guarda en
    `app.state.db` y se cierra al apagar. Los handlers lo reciben por
    `Depends(get_session)`, nunca importando un engine global.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=300,
            **_engine_kwargs(url),
        )
        if url.startswith("sqlite"):
            # sqlite trae las FK apagadas por conexión: sin esto no hay ON DELETE CASCADE
            event.listen(self.engine.sync_engine, "connect", _sqlite_enable_fks)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.db
    async with database.sessionmaker() as session:
        try:
            yield session
        except Exception:
            # sin transacción por request: lo que ya se commiteó, queda
            await session.rollback()
            raise
