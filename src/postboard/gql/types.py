"""GraphQL object and input types for posts.

Object types are built from the entity snapshots by explicit ``from_domain``
constructors; resolvers never hand ORM rows to the executor.
"""

from datetime import datetime

import strawberry

from postboard.models import enums
from postboard.schemas.media import Media, Tag
from postboard.schemas.post import Comment, Post, Reaction
from postboard.schemas.user import User

Role = strawberry.enum(enums.Role)
MediaType = strawberry.enum(enums.MediaType)
Visibility = strawberry.enum(enums.Visibility)
ReactionType = strawberry.enum(enums.ReactionType)


@strawberry.type(name="User")
class UserNode:
    id: int
    username: str | None
    email: str | None
    role: Role | None

    @classmethod
    def from_domain(cls, user: User) -> "UserNode":
        return cls(id=user.id, username=user.username, email=user.email, role=user.role)


def _user_node(user: User | None) -> UserNode | None:
    return UserNode.from_domain(user) if user is not None else None


@strawberry.type(name="Media")
class MediaNode:
    id: int
    url: str | None
    type: MediaType | None
    size: int | None
    content_type: str | None

    @classmethod
    def from_domain(cls, media: Media) -> "MediaNode":
        return cls(
            id=media.id,
            url=media.url,
            type=media.type,
            size=media.size,
            content_type=media.content_type,
        )


@strawberry.type(name="Tag")
class TagNode:
    id: int
    name: str | None
    usage_count: int

    @classmethod
    def from_domain(cls, tag: Tag) -> "TagNode":
        return cls(id=tag.id, name=tag.name, usage_count=tag.usage_count)


@strawberry.type(name="Reaction")
class ReactionNode:
    id: int
    type: ReactionType
    user: UserNode | None
    created_at: datetime | None
    post_id: int | None
    comment_id: int | None

    @classmethod
    def from_domain(cls, reaction: Reaction) -> "ReactionNode":
        return cls(
            id=reaction.id,
            type=reaction.type,
            user=_user_node(reaction.user),
            created_at=reaction.created_at,
            post_id=reaction.post_id,
            comment_id=reaction.comment_id,
        )


@strawberry.type(name="Comment")
class CommentNode:
    id: int
    content: str
    created_at: datetime | None
    author: UserNode | None
    reactions: list[ReactionNode]

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentNode":
        return cls(
            id=comment.id,
            content=comment.content,
            created_at=comment.created_at,
            author=_user_node(comment.author),
            reactions=[ReactionNode.from_domain(r) for r in comment.reactions],
        )


@strawberry.type(name="Post")
class PostNode:
    id: int
    content: str
    created_at: datetime | None
    draft: bool
    visibility: Visibility
    author: UserNode | None
    attachments: list[MediaNode]
    comments: list[CommentNode]
    reactions: list[ReactionNode]
    tags: list[TagNode]

    @strawberry.field
    def comment_count(self) -> int:
        """Number of comments already loaded with the post."""
        return len(self.comments)

    @strawberry.field
    def reaction_count(self) -> int:
        """Number of reactions already loaded with the post."""
        return len(self.reactions)

    @classmethod
    def from_domain(cls, post: Post) -> "PostNode":
        return cls(
            id=post.id,
            content=post.content,
            created_at=post.created_at,
            draft=post.draft,
            visibility=post.visibility,
            author=_user_node(post.author),
            attachments=[MediaNode.from_domain(m) for m in post.attachments],
            comments=[CommentNode.from_domain(c) for c in post.comments],
            reactions=[ReactionNode.from_domain(r) for r in post.reactions],
            tags=[TagNode.from_domain(t) for t in post.tags],
        )


@strawberry.input
class CreatePostInput:
    content: str
    author_id: int
    draft: bool = False
    visibility: Visibility = enums.Visibility.PUBLIC
    attachment_ids: list[int] = strawberry.field(default_factory=list)
    tag_ids: list[int] = strawberry.field(default_factory=list)


@strawberry.input
class UpdatePostInput:
    """Fields left null keep their stored values."""

    content: str | None = None
    draft: bool | None = None
    visibility: Visibility | None = None
    attachment_ids: list[int] | None = None
    tag_ids: list[int] | None = None
