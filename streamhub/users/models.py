# streamhub/users/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
)
from streamhub.db.base import Base


class User(Base):
    __tablename__ = "users"
    # ids nunca se reciclan: un token o un parent_id viejo no debe apuntar a otra fila
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    # siempre en minúsculas (lo normaliza el service)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    channel_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # referencia (URL) devuelta por el media host
    profile_picture: Mapped[str | None] = mapped_column(String(500), nullable=True)

    joined_date: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Subscription(Base):
    """
    Set de suscriptores de un canal: (canal, suscriptor) aparece una sola vez.
    """
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("channel_id", "subscriber_id", name="uq_subscription_channel_subscriber"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    channel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())


class WatchHistoryEntry(Base):
    """
    Historial: como mucho una entrada por (usuario, video), la más reciente.
    El video NO es FK: si lo borran, la entrada queda colgando y se salta al leer.
    """
    __tablename__ = "watch_history"
    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    video_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    watched_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False, index=True)


class WatchLaterEntry(Base):
    __tablename__ = "watch_later"
    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_later_user_video"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    video_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    added_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
