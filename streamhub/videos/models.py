# streamhub/videos/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    Float,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
    JSON,
)
from sqlalchemy.types import UnicodeText
from streamhub.db.base import Base


class Video(Base):
    __tablename__ = "videos"
    # ids nunca se reciclan: un token o un parent_id viejo no debe apuntar a otra fila
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # sin FK: borrar la cuenta no arrastra sus videos
    owner_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(UnicodeText, nullable=False)

    # referencias devueltas por el media host (URL/ruta), nunca bytes
    video_url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    views: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class VideoLike(Base):
    """
    Like de un usuario sobre un video.
    Un usuario solo puede dar like una vez al mismo video.
    """
    __tablename__ = "video_likes"
    __table_args__ = (
        UniqueConstraint("video_id", "user_id", name="uq_video_like"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())


class VideoView(Base):
    """
    Quién ya sumó su vista al contador. Cuenta una sola vez por usuario.
    """
    __tablename__ = "video_views"
    __table_args__ = (
        UniqueConstraint("video_id", "user_id", name="uq_video_view"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
