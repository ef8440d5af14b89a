"""Enumerated column types shared by the schema and the entity model."""

from enum import Enum


class Role(str, Enum):
    """Account role stored in the ``user_role`` type."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class MediaType(str, Enum):
    """Kind of uploaded media stored in the ``media_type`` type."""

    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"


class Visibility(str, Enum):
    """Audience a post is shown to, stored in the ``post_visibility`` type."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    FOLLOWERS_ONLY = "FOLLOWERS_ONLY"


class ReactionType(str, Enum):
    """Reaction flavour stored in the ``reaction_type`` type."""

    LIKE = "LIKE"
    LOVE = "LOVE"
    LAUGH = "LAUGH"
    SAD = "SAD"
    ANGRY = "ANGRY"
