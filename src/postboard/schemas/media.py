"""Media and tag snapshots."""

from pydantic import Field

from postboard.models.enums import MediaType
from postboard.schemas.common import EntityModel


class Media(EntityModel):
    """Stored file attached to a post or used as an avatar."""

    id: int | None = None
    url: str | None = None
    type: MediaType | None = None
    size: int | None = Field(None, ge=0)
    content_type: str | None = None


class Tag(EntityModel):
    """Topic label."""

    id: int | None = None
    name: str | None = None
    usage_count: int = 0
