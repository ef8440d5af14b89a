"""Service-level helpers shared by the REST and GraphQL front ends."""
from __future__ import annotations

from collections.abc import Sequence

from postboard.core.errors import PostNotFoundError
from postboard.models.enums import Visibility
from postboard.repositories.post_repo import PostRepository
from postboard.schemas.media import Media, Tag
from postboard.schemas.post import Post


class PostService:
    """Use cases over :class:`PostRepository`.

    Absence on single-post lookups becomes :class:`PostNotFoundError`; list
    reads return empty lists instead.
    """

    def __init__(self, repo: PostRepository) -> None:
        self.repo = repo

    def list_posts(self) -> list[Post]:
        return self.repo.find_all()

    def get_post(self, post_id: int) -> Post:
        """Return the post or raise ``PostNotFoundError``."""
        post = self.repo.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def posts_by_author(self, author_id: int) -> list[Post]:
        return self.repo.find_by_author_id(author_id)

    def search_posts(self, keyword: str) -> list[Post]:
        return self.repo.search(keyword)

    def create_post(self, post: Post) -> Post:
        """Insert ``post`` as a new row, ignoring any id it carries."""
        return self.repo.save(post.model_copy(update={"id": None}))

    def replace_post(self, post_id: int, post: Post) -> Post:
        """Overwrite an existing post with ``post``, including its attachment and tag sets.

        Raises:
            PostNotFoundError: If ``post_id`` does not exist.
        """
        self.get_post(post_id)
        return self.repo.save(post.model_copy(update={"id": post_id}))

    def update_post(
        self,
        post_id: int,
        *,
        content: str | None = None,
        draft: bool | None = None,
        visibility: Visibility | None = None,
        attachment_ids: Sequence[int] | None = None,
        tag_ids: Sequence[int] | None = None,
    ) -> Post:
        """Merge the given fields onto the stored post and save it.

        ``None`` keeps the stored value; for the id lists it keeps the stored set.

        Raises:
            PostNotFoundError: If ``post_id`` does not exist.
        """
        existing = self.get_post(post_id)
        changes: dict[str, object] = {}
        if content is not None:
            changes["content"] = content
        if draft is not None:
            changes["draft"] = draft
        if visibility is not None:
            changes["visibility"] = visibility
        if attachment_ids is not None:
            changes["attachments"] = tuple(Media(id=media_id) for media_id in attachment_ids)
        if tag_ids is not None:
            changes["tags"] = tuple(Tag(id=tag_id) for tag_id in tag_ids)
        return self.repo.save(existing.model_copy(update=changes))

    def delete_post(self, post_id: int) -> None:
        self.repo.delete_by_id(post_id)
