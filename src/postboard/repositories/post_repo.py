"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.core.errors import PostNotFoundError, PostValidationError, StorageError
from postboard.core.settings import settings
from postboard.db.transaction import transactional
from postboard.models import Post as PostRow
from postboard.models import post_attachments, post_tags
from postboard.repositories import post_query
from postboard.repositories.post_mapper import map_post_row
from postboard.schemas.post import Post

__all__ = ["PostRepository"]

logger = logging.getLogger(__name__)


class PostRepository:
    """Reads and writes posts with their attachments, tags, comments and reactions.

    Every read goes through one aggregating statement; writes run inside
    :func:`~postboard.db.transaction.transactional` so a post row is never left
    without the attachment and tag links it was saved with.
    """

    def __init__(self, session: Session, *, search_limit: int | None = None) -> None:
        """Initialize the repository with a request-scoped SQLAlchemy session."""
        self.session = session
        if search_limit is None:
            search_limit = settings.search_result_limit
        self.search_limit = search_limit

    @property
    def _dialect(self) -> str:
        return self.session.get_bind().dialect.name

    def _fetch(
        self,
        criteria: Sequence[ColumnElement[bool]] = (),
        *,
        limit: int | None = None,
    ) -> list[Post]:
        stmt = post_query.select_posts(self._dialect, criteria, limit=limit)
        logger.debug("Loading posts: %s", stmt.whereclause)
        try:
            rows = self.session.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            logger.exception("Post query failed")
            raise StorageError("Failed to load posts") from exc
        return [map_post_row(row) for row in rows]

    def find_all(self) -> list[Post]:
        """Return every post, newest first."""
        return self._fetch()

    def find_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier, or ``None`` when it does not exist."""
        posts = self._fetch([post_query.POST.c.id == post_id])
        return posts[0] if posts else None

    def find_by_author_id(self, author_id: int) -> list[Post]:
        """Return posts written by ``author_id``, newest first."""
        return self._fetch([post_query.POST.c.author_id == author_id])

    def search(self, keyword: str) -> list[Post]:
        """Return posts whose content contains ``keyword``, ignoring case.

        Wildcards in ``keyword`` match literally and at most ``search_limit``
        posts are returned, newest first.
        """
        return self._fetch([post_query.content_contains(keyword)], limit=self.search_limit)

    def save(self, post: Post) -> Post:
        """Insert or update ``post`` and return it as now stored.

        A post without an id is inserted; otherwise its scalar columns are
        updated in place and its attachment and tag links are replaced by the
        ones on ``post``. The returned snapshot is always re-read from storage.

        Raises:
            PostValidationError: If content is blank, a new post has no
                author, or a referenced row does not exist.
            PostNotFoundError: If ``post.id`` names a row that does not exist.
            StorageError: If the transaction fails.
        """
        author_id = self._validate(post)
        with transactional(self.session):
            if post.id is None:
                post_id = self._insert(post, author_id)
            else:
                post_id = post.id
                self._update(post)
            self._replace_relations(post_id, post)

        saved = self.find_by_id(post_id)
        if saved is None:
            raise PostNotFoundError(post_id)
        return saved

    def delete_by_id(self, post_id: int) -> None:
        """Delete a post; comments, reactions and links go with it via FK cascades.

        Deleting an id that does not exist is a no-op.
        """
        with transactional(self.session):
            result = self.session.execute(delete(PostRow).where(PostRow.id == post_id))
        logger.info("Deleted post %s (%d row(s))", post_id, result.rowcount)

    @staticmethod
    def _validate(post: Post) -> int | None:
        """Check ``post`` before writing and return its author id, if any."""
        if not post.content or not post.content.strip():
            raise PostValidationError("Post content must not be blank")
        author_id = post.author.id if post.author is not None else None
        if post.id is None and author_id is None:
            raise PostValidationError("Post author is required")
        return author_id

    def _insert(self, post: Post, author_id: int | None) -> int:
        row = PostRow(
            content=post.content,
            author_id=author_id,
            draft=post.draft,
            visibility=post.visibility,
        )
        self.session.add(row)
        self.session.flush()
        logger.info("Created post %s for author %s", row.id, author_id)
        return row.id

    def _update(self, post: Post) -> None:
        result = self.session.execute(
            update(PostRow)
            .where(PostRow.id == post.id)
            .values(content=post.content, draft=post.draft, visibility=post.visibility)
        )
        if result.rowcount == 0:
            raise PostNotFoundError(post.id)
        logger.info("Updated post %s", post.id)

    def _replace_relations(self, post_id: int, post: Post) -> None:
        # Clear-then-reinsert keeps storage identical to the incoming sets.
        self.session.execute(delete(post_attachments).where(post_attachments.c.post_id == post_id))
        self.session.execute(delete(post_tags).where(post_tags.c.post_id == post_id))
        self._link(
            post_attachments,
            post_id,
            "media_id",
            (media.id for media in post.attachments),
        )
        self._link(post_tags, post_id, "tag_id", (tag.id for tag in post.tags))

    def _link(self, table: Any, post_id: int, column: str, ids: Iterable[int | None]) -> None:
        unique_ids = list(dict.fromkeys(i for i in ids if i is not None))
        if not unique_ids:
            return
        self.session.execute(
            insert(table),
            [{"post_id": post_id, column: target_id} for target_id in unique_ids],
        )
