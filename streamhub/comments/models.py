# streamhub/comments/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Text, String, DateTime, func
from streamhub.db.base import Base


class Comment(Base):
    __tablename__ = "comments"
    # ids nunca se reciclan: un token o un parent_id viejo no debe apuntar a otra fila
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # sin FK ni cascada: borrar el video o el padre deja estos comentarios huérfanos
    video_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    # nombre del autor al momento de comentar; no se re-sincroniza si cambia
    username: Mapped[str] = mapped_column(String(50), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # si es respuesta (None ⇒ raíz); fijo desde la creación
    parent_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
