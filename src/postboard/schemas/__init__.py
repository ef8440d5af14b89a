"""
Pydantic schemas for the entity model and API payloads.

These are immutable snapshots; nothing here talks to the database.
"""

from .common import EntityModel, EntityRef
from .media import Media, Tag
from .post import Comment, Post, PostPayload, Reaction
from .user import Profile, User

__all__ = [
    "EntityModel", "EntityRef",
    "Media", "Tag",
    "Comment", "Post", "PostPayload", "Reaction",
    "Profile", "User",
]
