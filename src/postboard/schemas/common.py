"""Shared Pydantic configuration for entity snapshots."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Immutable value snapshot serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EntityRef(BaseModel):
    """Reference to an existing row inside a write payload; only ``id`` is read."""

    id: int

    model_config = ConfigDict(extra="ignore")
