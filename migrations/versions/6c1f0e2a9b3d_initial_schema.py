"""initial schema

Revision ID: 6c1f0e2a9b3d
Revises:
Create Date: 2026-10-19 09:12:41.518203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "6c1f0e2a9b3d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

USER_ROLE = sa.Enum("USER", "MODERATOR", "ADMIN", name="user_role")
MEDIA_TYPE = sa.Enum("IMAGE", "VIDEO", "DOCUMENT", name="media_type")
POST_VISIBILITY = sa.Enum("PUBLIC", "PRIVATE", "FOLLOWERS_ONLY", name="post_visibility")
REACTION_TYPE = sa.Enum("LIKE", "LOVE", "LAUGH", "SAD", "ANGRY", name="reaction_type")

ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(name, sa.DateTime(), server_default=sa.func.current_timestamp())


def upgrade() -> None:
    """Create users, media, tags, posts and their relation tables."""
    op.create_table(
        "users",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", USER_ROLE, nullable=False, server_default="USER"),
        _created_at(),
    )
    op.create_table(
        "media",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("url", sa.String(255), nullable=False),
        sa.Column("media_type", MEDIA_TYPE, nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
        _created_at(),
    )
    op.create_table(
        "profiles",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("user_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE"), unique=True),
        sa.Column("display_name", sa.String(100)),
        sa.Column("bio", sa.Text()),
        sa.Column("avatar_id", ID, sa.ForeignKey("media.id", ondelete="SET NULL")),
        _created_at("joined_at"),
    )
    op.create_table(
        "user_relationships",
        sa.Column(
            "follower_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "following_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        _created_at(),
    )
    op.create_table(
        "tags",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("usage_count", sa.Integer(), server_default="0"),
        _created_at(),
    )
    op.create_table(
        "posts",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        _created_at("updated_at"),
        sa.Column("author_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("draft", sa.Boolean(), server_default=sa.false()),
        sa.Column("visibility", POST_VISIBILITY, server_default="PUBLIC"),
    )
    op.create_table(
        "post_attachments",
        sa.Column("post_id", ID, sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("media_id", ID, sa.ForeignKey("media.id", ondelete="CASCADE"), primary_key=True),
        _created_at(),
    )
    op.create_table(
        "post_tags",
        sa.Column("post_id", ID, sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", ID, sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "comments",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        _created_at("updated_at"),
        sa.Column("post_id", ID, sa.ForeignKey("posts.id", ondelete="CASCADE")),
        sa.Column("author_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE")),
    )
    op.create_table(
        "reactions",
        sa.Column("id", ID, primary_key=True, autoincrement=True),
        sa.Column("type", REACTION_TYPE, nullable=False),
        sa.Column("user_id", ID, sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("post_id", ID, sa.ForeignKey("posts.id", ondelete="CASCADE")),
        sa.Column("comment_id", ID, sa.ForeignKey("comments.id", ondelete="CASCADE")),
        _created_at(),
        sa.CheckConstraint(
            "(post_id IS NOT NULL AND comment_id IS NULL) OR "
            "(post_id IS NULL AND comment_id IS NOT NULL)",
            name="ck_reactions_single_target",
        ),
    )

    op.create_index("idx_profiles_user_id", "profiles", ["user_id"])
    op.create_index("idx_posts_author_id", "posts", ["author_id"])
    op.create_index("idx_posts_created_at", "posts", ["created_at"])
    op.create_index("idx_comments_post_id", "comments", ["post_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])
    op.create_index("idx_reactions_post_id", "reactions", ["post_id"])
    op.create_index("idx_reactions_comment_id", "reactions", ["comment_id"])
    op.create_index("idx_tags_name", "tags", ["name"])


def downgrade() -> None:
    """Drop every table and enum type created by :func:`upgrade`."""
    for table in (
        "reactions",
        "comments",
        "post_tags",
        "post_attachments",
        "posts",
        "tags",
        "user_relationships",
        "profiles",
        "media",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (REACTION_TYPE, POST_VISIBILITY, MEDIA_TYPE, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)
