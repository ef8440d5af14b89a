# src/postboard/models/user.py
"""SQLAlchemy models for user accounts and profiles."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.db.session import Base
from postboard.db.types import BigIntegerId
from postboard.models.enums import Role

if TYPE_CHECKING:
    from postboard.models.media import Media
    from postboard.models.post import Post

# Self-referential follow graph; a row means follower_id follows following_id.
user_relationships = Table(
    "user_relationships",
    Base.metadata,
    Column(
        "follower_id",
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "following_id",
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)


class User(Base):
    """Registered account that authors posts, comments and reactions."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role"),
        nullable=False,
        default=Role.USER,
        server_default=Role.USER.value,
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    profile: Mapped[Profile | None] = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        passive_deletes=True,
    )
    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="author",
        passive_deletes=True,
    )
    following: Mapped[list[User]] = relationship(
        "User",
        secondary=user_relationships,
        primaryjoin=lambda: User.id == user_relationships.c.follower_id,
        secondaryjoin=lambda: User.id == user_relationships.c.following_id,
        back_populates="followers",
        passive_deletes=True,
    )
    followers: Mapped[list[User]] = relationship(
        "User",
        secondary=user_relationships,
        primaryjoin=lambda: User.id == user_relationships.c.following_id,
        secondaryjoin=lambda: User.id == user_relationships.c.follower_id,
        back_populates="following",
        passive_deletes=True,
    )


class Profile(Base):
    """Public profile; exactly one per user."""

    __tablename__ = "profiles"
    __table_args__ = (Index("idx_profiles_user_id", "user_id"),)

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
    )
    display_name: Mapped[str | None] = mapped_column(String(100))
    bio: Mapped[str | None] = mapped_column(Text)
    avatar_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("media.id", ondelete="SET NULL"),
        nullable=True,
    )
    joined_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    user: Mapped[User | None] = relationship("User", back_populates="profile")
    avatar: Mapped[Media | None] = relationship("Media")
