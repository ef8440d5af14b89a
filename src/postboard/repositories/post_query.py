"""Single-statement query that loads posts together with all of their relations.

Every read path starts from :func:`select_posts`, so each one returns the same
row shape::

    id, content, created_at, draft, visibility,
    attachments, comments, reactions, tags   -- JSON arrays, one per relation
    author                                   -- JSON object

Relations are LEFT JOINed and folded into JSON arrays with a ``FILTER`` so a
post without related rows yields an empty (or NULL) aggregate instead of an
array holding one all-null object. Joining several one-to-many relations at
once multiplies rows; PostgreSQL removes the duplicates with ``DISTINCT`` and
the row mapper de-duplicates by id for dialects without a usable
``DISTINCT`` on JSON values.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, Select, String, distinct, func, literal_column, select, type_coerce

from postboard.models import Comment, Media, Post, Reaction, Tag, User, post_attachments, post_tags

__all__ = [
    "AUTHOR",
    "LIKE_ESCAPE",
    "POST",
    "content_contains",
    "escape_like",
    "select_posts",
]

LIKE_ESCAPE = "\\"

POST = Post.__table__.alias("p")
AUTHOR = User.__table__.alias("u")
_ATTACHMENT_LINK = post_attachments.alias("pa")
_MEDIA = Media.__table__.alias("m")
_COMMENT = Comment.__table__.alias("c")
_COMMENTER = User.__table__.alias("cu")
_REACTION = Reaction.__table__.alias("r")
_REACTOR = User.__table__.alias("ru")
_TAG_LINK = post_tags.alias("pt")
_TAG = Tag.__table__.alias("t")


@dataclass(frozen=True)
class _JsonFunctions:
    """JSON constructors for one SQL dialect."""

    build_object: str
    aggregate: str
    distinct_aggregate: bool

    def obj(self, *pairs: tuple[str, Any]) -> ColumnElement[Any]:
        args: list[Any] = []
        for key, value in pairs:
            # Keys are fixed identifiers; inline them so no driver has to guess a type.
            args.append(literal_column(f"'{key}'"))
            args.append(value)
        return getattr(func, self.build_object)(*args)

    def array(self, element: ColumnElement[Any], present: ColumnElement[Any]) -> ColumnElement[Any]:
        if self.distinct_aggregate:
            element = distinct(element)
        return getattr(func, self.aggregate)(element).filter(present.is_not(None))


_POSTGRES_JSON = _JsonFunctions("jsonb_build_object", "jsonb_agg", distinct_aggregate=True)
# SQLite drops the JSON subtype of values passed through DISTINCT, so elements
# would come back as strings; duplicates are removed by the mapper instead.
_SQLITE_JSON = _JsonFunctions("json_object", "json_group_array", distinct_aggregate=False)


def _json_functions(dialect_name: str) -> _JsonFunctions:
    if dialect_name == "postgresql":
        return _POSTGRES_JSON
    if dialect_name == "sqlite":
        return _SQLITE_JSON
    raise ValueError(f"Unsupported dialect for post queries: {dialect_name}")


def _user_object(json: _JsonFunctions, user: Any) -> ColumnElement[Any]:
    return json.obj(
        ("id", user.c.id),
        ("username", user.c.username),
        ("email", user.c.email),
        ("role", user.c.role),
    )


def _base_query(dialect_name: str) -> Select[Any]:
    json = _json_functions(dialect_name)

    attachments = json.array(
        json.obj(
            ("id", _MEDIA.c.id),
            ("url", _MEDIA.c.url),
            ("type", _MEDIA.c.media_type),
            ("size", _MEDIA.c.size),
            ("contentType", _MEDIA.c.content_type),
        ),
        _MEDIA.c.id,
    )
    comments = json.array(
        json.obj(
            ("id", _COMMENT.c.id),
            ("content", _COMMENT.c.content),
            ("createdAt", _COMMENT.c.created_at),
            ("author", _user_object(json, _COMMENTER)),
        ),
        _COMMENT.c.id,
    )
    reactions = json.array(
        json.obj(
            ("id", _REACTION.c.id),
            ("type", _REACTION.c.type),
            ("createdAt", _REACTION.c.created_at),
            ("postId", _REACTION.c.post_id),
            ("commentId", _REACTION.c.comment_id),
            ("user", _user_object(json, _REACTOR)),
        ),
        _REACTION.c.id,
    )
    tags = json.array(
        json.obj(
            ("id", _TAG.c.id),
            ("name", _TAG.c.name),
            ("usageCount", _TAG.c.usage_count),
        ),
        _TAG.c.id,
    )

    joined = (
        POST.outerjoin(_ATTACHMENT_LINK, _ATTACHMENT_LINK.c.post_id == POST.c.id)
        .outerjoin(_MEDIA, _MEDIA.c.id == _ATTACHMENT_LINK.c.media_id)
        .outerjoin(_COMMENT, _COMMENT.c.post_id == POST.c.id)
        .outerjoin(_COMMENTER, _COMMENTER.c.id == _COMMENT.c.author_id)
        .outerjoin(_REACTION, _REACTION.c.post_id == POST.c.id)
        .outerjoin(_REACTOR, _REACTOR.c.id == _REACTION.c.user_id)
        .outerjoin(AUTHOR, AUTHOR.c.id == POST.c.author_id)
        .outerjoin(_TAG_LINK, _TAG_LINK.c.post_id == POST.c.id)
        .outerjoin(_TAG, _TAG.c.id == _TAG_LINK.c.tag_id)
    )

    return (
        select(
            POST.c.id,
            POST.c.content,
            POST.c.created_at,
            POST.c.draft,
            # Raw enum text; the mapper owns the name lookup and its failure mode.
            type_coerce(POST.c.visibility, String).label("visibility"),
            attachments.label("attachments"),
            comments.label("comments"),
            reactions.label("reactions"),
            _user_object(json, AUTHOR).label("author"),
            tags.label("tags"),
        )
        .select_from(joined)
        .group_by(POST.c.id, AUTHOR.c.id)
    )


def select_posts(
    dialect_name: str,
    criteria: Sequence[ColumnElement[bool]] = (),
    *,
    newest_first: bool = True,
    limit: int | None = None,
) -> Select[Any]:
    """Return the post-with-relations statement filtered by ``criteria``.

    Args:
        dialect_name: ``engine.dialect.name`` of the bound connection.
        criteria: WHERE predicates over :data:`POST` / :data:`AUTHOR`.
        newest_first: Order by ``created_at`` descending (id breaks ties).
        limit: Optional cap on returned posts.

    Raises:
        ValueError: If the dialect has no JSON aggregate mapping.
    """
    stmt = _base_query(dialect_name)
    if criteria:
        stmt = stmt.where(*criteria)
    if newest_first:
        stmt = stmt.order_by(POST.c.created_at.desc(), POST.c.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def content_contains(keyword: str) -> ColumnElement[bool]:
    """Case-insensitive substring predicate on post content."""
    return POST.c.content.ilike(f"%{escape_like(keyword)}%", escape=LIKE_ESCAPE)
