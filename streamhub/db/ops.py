# streamhub/db/ops.py
"""
Operaciones atómicas de pertenencia a un conjunto.

Los "sets" (likes, vistas, suscriptores, ver más tarde) son tablas con
UniqueConstraint sobre el par. Agregar/quitar se hace con UNA sentencia
cada vez, así dos clicks seguidos no se pisan como pasaría con
leer → modificar en memoria → guardar.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def _insert_for(dialect: str):
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise RuntimeError(f"dialecto no soportado para set-add atómico: {dialect}")


async def set_add(db: AsyncSession, model: Any, **values) -> bool:
    """
    INSERT ... ON CONFLICT DO NOTHING.
    Devuelve True si la fila se insertó (ausente → presente).
    """
    # misma transacción que la sesión, pero a nivel Core para tener rowcount
    conn = await db.connection()
    insert = _insert_for(conn.dialect.name)
    stmt = insert(model.__table__).values(**values).on_conflict_do_nothing()
    res = await conn.execute(stmt)
    return res.rowcount == 1


async def set_remove(db: AsyncSession, model: Any, **values) -> bool:
    """
    DELETE ... WHERE <par>.
    Devuelve True si había fila (presente → ausente).
    """
    table = model.__table__
    conn = await db.connection()
    stmt = delete(table)
    for col, value in values.items():
        stmt = stmt.where(table.c[col] == value)
    res = await conn.execute(stmt)
    return res.rowcount > 0


async def set_toggle(db: AsyncSession, model: Any, **values) -> tuple[bool, bool]:
    """
    Flip de pertenencia: si estaba, se quita; si no, se agrega.
    Devuelve (es_miembro_ahora, agregado). Si otra request insertó el mismo
    par justo antes queda (True, False): miembro, pero sin transición propia.
    """
    if await set_remove(db, model, **values):
        return False, False
    inserted = await set_add(db, model, **values)
    return True, inserted
