# src/postboard/models/post.py
"""SQLAlchemy models for posts, their join tables, comments and reactions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Table,
    Text,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.db.session import Base
from postboard.db.types import BigIntegerId
from postboard.models.enums import ReactionType, Visibility
from postboard.models.media import Media, Tag
from postboard.models.user import User

post_attachments = Table(
    "post_attachments",
    Base.metadata,
    Column(
        "post_id",
        BigIntegerId,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "media_id",
        BigIntegerId,
        ForeignKey("media.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column(
        "post_id",
        BigIntegerId,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        BigIntegerId,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Post(Base):
    """Primary content entity produced by users.

    Comments, reactions and attachment links are removed by the database when
    the post row is deleted (``ON DELETE CASCADE``); application code never
    deletes them itself.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("idx_posts_author_id", "author_id"),
        Index("idx_posts_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )
    author_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
    )
    draft: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    visibility: Mapped[Visibility] = mapped_column(
        Enum(Visibility, name="post_visibility"),
        default=Visibility.PUBLIC,
        server_default=Visibility.PUBLIC.value,
    )

    author: Mapped[User | None] = relationship("User", back_populates="posts")
    attachments: Mapped[list[Media]] = relationship(
        "Media",
        secondary=post_attachments,
        passive_deletes=True,
    )
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary=post_tags,
        passive_deletes=True,
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        passive_deletes=True,
    )
    reactions: Mapped[list[Reaction]] = relationship(
        "Reaction",
        back_populates="post",
        passive_deletes=True,
    )


class Comment(Base):
    """Reply left on a post."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("idx_comments_post_id", "post_id"),
        Index("idx_comments_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )
    post_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("posts.id", ondelete="CASCADE"),
    )
    author_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
    )

    post: Mapped[Post | None] = relationship("Post", back_populates="comments")
    author: Mapped[User | None] = relationship("User")
    reactions: Mapped[list[Reaction]] = relationship(
        "Reaction",
        back_populates="comment",
        passive_deletes=True,
    )


class Reaction(Base):
    """Reaction left by a user on exactly one post or one comment."""

    __tablename__ = "reactions"
    __table_args__ = (
        CheckConstraint(
            "(post_id IS NOT NULL AND comment_id IS NULL) OR "
            "(post_id IS NULL AND comment_id IS NOT NULL)",
            name="ck_reactions_single_target",
        ),
        Index("idx_reactions_post_id", "post_id"),
        Index("idx_reactions_comment_id", "comment_id"),
    )

    id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type"), nullable=False
    )
    user_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id", ondelete="CASCADE"),
    )
    post_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        BigIntegerId,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    user: Mapped[User | None] = relationship("User")
    post: Mapped[Post | None] = relationship("Post", back_populates="reactions")
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="reactions")
