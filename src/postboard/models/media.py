# src/postboard/models/media.py
"""SQLAlchemy models for uploaded media and tags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from postboard.db.session import Base
from postboard.db.types import BigIntegerId
from postboard.models.enums import MediaType


class Media(Base):
    """Stored file referenced by post attachments and profile avatars."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(255), nullable=False)
    media_type: Mapped[MediaType] = mapped_column(
        Enum(MediaType, name="media_type"), nullable=False
    )
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )


class Tag(Base):
    """Topic label attached to posts."""

    __tablename__ = "tags"
    __table_args__ = (Index("idx_tags_name", "name"),)

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    usage_count: Mapped[int | None] = mapped_column(Integer, default=0, server_default="0")
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )
