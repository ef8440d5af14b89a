# src/postboard/models/__init__.py
"""SQLAlchemy models for the Postboard schema."""

from .enums import MediaType, ReactionType, Role, Visibility
from .media import Media, Tag
from .post import Comment, Post, Reaction, post_attachments, post_tags
from .user import Profile, User, user_relationships

__all__ = [
    "MediaType", "ReactionType", "Role", "Visibility",
    "Media", "Tag",
    "Comment", "Post", "Reaction", "post_attachments", "post_tags",
    "Profile", "User", "user_relationships",
]
