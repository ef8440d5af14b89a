"""User and profile snapshots."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from postboard.models.enums import Role
from postboard.schemas.common import EntityModel
from postboard.schemas.media import Media


class Profile(EntityModel):
    """Public profile shown next to a user's content."""

    id: int | None = None
    display_name: str | None = None
    bio: str | None = None
    joined_at: datetime | None = None
    avatar: Media | None = None


class User(EntityModel):
    """Account snapshot.

    ``hashed_password`` is never serialized; the post query does not load it.
    """

    id: int | None = None
    username: str | None = None
    email: str | None = None
    hashed_password: str | None = Field(None, exclude=True)
    role: Role | None = None
    profile: Profile | None = None
