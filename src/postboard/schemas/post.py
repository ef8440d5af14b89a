"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from postboard.models.enums import ReactionType, Visibility
from postboard.schemas.common import EntityModel, EntityRef
from postboard.schemas.media import Media, Tag
from postboard.schemas.user import User


class Reaction(EntityModel):
    """Reaction on a post or on a comment; exactly one of the targets is set."""

    id: int
    type: ReactionType
    user: User | None = None
    created_at: datetime | None = None
    post_id: int | None = None
    comment_id: int | None = None


class Comment(EntityModel):
    """Comment on a post, with its author resolved."""

    id: int
    content: str
    created_at: datetime | None = None
    author: User | None = None
    reactions: tuple[Reaction, ...] = ()


class Post(EntityModel):
    """A post together with every relation read back from storage.

    ``id`` is ``None`` until the post has been inserted. ``author`` may be a
    bare reference (only ``id`` set) on writes.
    """

    id: int | None = None
    content: str
    created_at: datetime | None = None
    draft: bool = False
    visibility: Visibility = Visibility.PUBLIC
    author: User | None = None
    attachments: tuple[Media, ...] = ()
    comments: tuple[Comment, ...] = ()
    reactions: tuple[Reaction, ...] = ()
    tags: tuple[Tag, ...] = ()


class PostPayload(EntityModel):
    """REST request body for creating or replacing a post.

    Mirrors the ``Post`` JSON shape; nested objects are reduced to their ids.
    """

    id: int | None = None
    content: str | None = Field(None, description="Post body")
    author: EntityRef | None = None
    draft: bool = False
    visibility: Visibility = Visibility.PUBLIC
    attachments: list[EntityRef] = Field(default_factory=list)
    tags: list[EntityRef] = Field(default_factory=list)

    def to_post(self, post_id: int | None = None) -> Post:
        """Build the write snapshot, using ``post_id`` in place of the body id."""
        return Post(
            id=post_id,
            content=self.content or "",
            draft=self.draft,
            visibility=self.visibility,
            author=User(id=self.author.id) if self.author else None,
            attachments=tuple(Media(id=ref.id) for ref in self.attachments),
            tags=tuple(Tag(id=ref.id) for ref in self.tags),
        )
