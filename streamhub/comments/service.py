# streamhub/comments/service.py
from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.comments import repository as repo
from streamhub.comments.models import Comment
from streamhub.notifications.service import notify, comment_message, watch_link
from streamhub.users import repository as users_repo
from streamhub.users.models import User
from streamhub.videos.models import Video


class ParentCommentError(ValueError):
    pass


def build_tree(raw: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Arma el bosque de hilos a partir de una lista plana de comentarios
    (ya ordenada por fecha ascendente).

    El mapa id → nodo se llena completo ANTES de enganchar nada, así una
    respuesta a una respuesta encuentra a su padre sin importar la
    profundidad: una sola pasada, O(n).

    Si el `parent_id` no está en el mapa (padre borrado o de otro video),
    el comentario no aparece: no se promueve a raíz.
    """
    items = list(raw)
    by_id: dict[Any, dict[str, Any]] = {}
    for c in items:
        by_id[c["id"]] = {**c, "replies": []}

    roots: list[dict[str, Any]] = []
    for c in items:
        node = by_id[c["id"]]
        pid = c.get("parent_id")
        if pid is None:
            roots.append(node)
            continue
        parent = by_id.get(pid)
        if parent is not None:
            parent["replies"].append(node)

    return roots


def _author(user: User | None) -> dict | None:
    if not user:
        return None
    return {
        "id": user.id,
        "username": user.username,
        "profile_picture": user.profile_picture,
    }


def comment_dict(c: Comment, author: User | None) -> dict[str, Any]:
    return {
        "id": c.id,
        "content": c.content,
        "video_id": c.video_id,
        "user_id": c.user_id,
        "username": c.username,
        "parent_id": c.parent_id,
        "created_at": c.created_at,
        "author": _author(author),
    }


async def hydrate_comments(db: AsyncSession, comments: list[Comment]) -> list[dict[str, Any]]:
    authors = await users_repo.get_many(db, {c.user_id for c in comments})
    return [comment_dict(c, authors.get(c.user_id)) for c in comments]


async def nested_for_video(db: AsyncSession, video_id: int) -> list[dict[str, Any]]:
    comments = await repo.list_video_comments(db, video_id)
    return build_tree(await hydrate_comments(db, comments))


async def _check_parent(db: AsyncSession, parent_id: int, video_id: int) -> None:
    parent = await repo.get_comment(db, parent_id)
    if parent is None or parent.video_id != video_id:
        raise ParentCommentError("Parent comment not found on this video")


async def create_comment(
    db: AsyncSession,
    *,
    video: Video,
    author: User,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    """
    Crea el comentario (o respuesta) y avisa al dueño del video en la
    misma transacción. El commit lo hace el router.
    """
    if parent_id is not None:
        await _check_parent(db, parent_id, video.id)

    c = await repo.create_comment(
        db,
        user_id=author.id,
        username=author.username,
        video_id=video.id,
        content=content,
        parent_id=parent_id,
    )
    await notify(
        db,
        recipient_id=video.owner_id,
        actor_id=author.id,
        message=comment_message(author.username, video.title),
        link=watch_link(video.id),
    )
    return c
