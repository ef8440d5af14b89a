"""Turn rows of the post-with-relations query into ``Post`` snapshots.

Each JSON column is decoded on its own by a dedicated function. Missing or
NULL aggregates become empty tuples; a missing author, malformed JSON or an
unknown enum name is a :class:`MappingError` for that row.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from pydantic import ValidationError

from postboard.core.errors import MappingError
from postboard.models.enums import MediaType, ReactionType, Role, Visibility
from postboard.schemas.media import Media, Tag
from postboard.schemas.post import Comment, Post, Reaction
from postboard.schemas.user import User

__all__ = ["map_post_row"]

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


class _BadValue(ValueError):
    """Internal signal; converted to MappingError with the row id attached."""


def _decode(raw: Any, column: str) -> Any:
    # psycopg hands back jsonb already decoded; SQLite returns text.
    if raw is None or isinstance(raw, (list, dict)):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        raise _BadValue(f"column {column!r} holds {type(raw).__name__}, expected JSON")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise _BadValue(f"column {column!r} is not valid JSON: {exc.msg}") from exc


def _enum(enum_type: type[E], value: Any, field: str) -> E:
    try:
        return enum_type[value]
    except (KeyError, TypeError) as exc:
        raise _BadValue(f"unknown {field} {value!r}") from exc


def _optional_enum(enum_type: type[E], value: Any, field: str) -> E | None:
    return None if value is None else _enum(enum_type, value, field)


def _timestamp(value: Any, field: str) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise _BadValue(f"bad {field} timestamp {value!r}") from exc


def _user(item: Mapping[str, Any] | None) -> User | None:
    if not item or item.get("id") is None:
        return None
    return User(
        id=item["id"],
        username=item.get("username"),
        email=item.get("email"),
        role=_optional_enum(Role, item.get("role"), "role"),
    )


def _media(item: Mapping[str, Any]) -> Media:
    return Media(
        id=item["id"],
        url=item.get("url"),
        type=_optional_enum(MediaType, item.get("type"), "media type"),
        size=item.get("size"),
        content_type=item.get("contentType"),
    )


def _tag(item: Mapping[str, Any]) -> Tag:
    return Tag(
        id=item["id"],
        name=item.get("name"),
        usage_count=item.get("usageCount") or 0,
    )


def _reaction(item: Mapping[str, Any]) -> Reaction:
    return Reaction(
        id=item["id"],
        type=_enum(ReactionType, item.get("type"), "reaction type"),
        user=_user(item.get("user")),
        created_at=_timestamp(item.get("createdAt"), "reaction"),
        post_id=item.get("postId"),
        comment_id=item.get("commentId"),
    )


def _comment(item: Mapping[str, Any]) -> Comment:
    return Comment(
        id=item["id"],
        content=item.get("content") or "",
        created_at=_timestamp(item.get("createdAt"), "comment"),
        author=_user(item.get("author")),
    )


def _unique_items(raw: Any, column: str) -> list[Mapping[str, Any]]:
    """Decode an aggregate column and drop null and repeated entries by id."""
    decoded = _decode(raw, column)
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise _BadValue(f"column {column!r} is not a JSON array")
    seen: set[Any] = set()
    items: list[Mapping[str, Any]] = []
    for item in decoded:
        if not isinstance(item, Mapping) or item.get("id") is None:
            continue
        if item["id"] in seen:
            continue
        seen.add(item["id"])
        items.append(item)
    return items


def _relation(
    row: Mapping[str, Any],
    column: str,
    build: Callable[[Mapping[str, Any]], T],
    sort_key: Callable[[T], Any],
) -> tuple[T, ...]:
    items: Iterable[Mapping[str, Any]] = _unique_items(row.get(column), column)
    try:
        built = [build(item) for item in items]
    except _BadValue:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise _BadValue(f"column {column!r} has a malformed entry: {exc}") from exc
    return tuple(sorted(built, key=sort_key))


def _comment_order(comment: Comment) -> tuple[datetime, int]:
    return (comment.created_at or datetime.min, comment.id)


def _author(row: Mapping[str, Any]) -> User:
    decoded = _decode(row.get("author"), "author")
    if not isinstance(decoded, Mapping):
        raise _BadValue("author is missing")
    author = _user(decoded)
    if author is None:
        raise _BadValue("author is missing")
    return author


def map_post_row(row: Mapping[str, Any]) -> Post:
    """Build a ``Post`` from one result row of the post query.

    Args:
        row: Column name to value mapping (``Row._mapping``).

    Returns:
        The fully populated, immutable post snapshot.

    Raises:
        MappingError: If the author cannot be resolved, a JSON column is
            malformed or an enum name is unknown.
    """
    row_id = row.get("id")
    try:
        return Post(
            id=row_id,
            content=row["content"],
            created_at=_timestamp(row.get("created_at"), "post"),
            draft=bool(row.get("draft")),
            visibility=_enum(Visibility, row.get("visibility"), "visibility"),
            author=_author(row),
            attachments=_relation(row, "attachments", _media, lambda m: m.id),
            comments=_relation(row, "comments", _comment, _comment_order),
            reactions=_relation(row, "reactions", _reaction, lambda r: r.id),
            tags=_relation(row, "tags", _tag, lambda t: t.id),
        )
    except _BadValue as exc:
        logger.error("Failed to map post row %s: %s", row_id, exc)
        raise MappingError(row_id, str(exc)) from exc
    except KeyError as exc:
        logger.error("Failed to map post row %s: missing column %s", row_id, exc)
        raise MappingError(row_id, f"missing column {exc}") from exc
    except ValidationError as exc:
        logger.error("Failed to map post row %s: %s", row_id, exc)
        raise MappingError(row_id, "row does not form a valid post") from exc
