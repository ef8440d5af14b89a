# src/postboard/api/endpoints/posts.py
"""Post-related REST endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from postboard.db.session import get_db
from postboard.repositories.post_repo import PostRepository
from postboard.schemas.post import Post, PostPayload
from postboard.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

SessionDep = Annotated[Session, Depends(get_db)]


def get_post_service(db: SessionDep) -> PostService:
    """Build the post service on top of the request's session."""
    return PostService(PostRepository(db))


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


@router.get("", response_model=list[Post])
def list_posts(service: PostServiceDep) -> list[Post]:
    """List every post, newest first."""
    return service.list_posts()


@router.get("/search", response_model=list[Post])
def search_posts(
    service: PostServiceDep,
    keyword: str = Query(..., description="Case-insensitive substring of the post content"),
) -> list[Post]:
    """Search posts by content.

    Args:
        service: Post service for the request
        keyword: Substring to look for; ``%`` and ``_`` match literally

    Returns:
        Matching posts, newest first, capped by the configured search limit
    """
    return service.search_posts(keyword)


@router.get("/author/{author_id}", response_model=list[Post])
def list_posts_by_author(author_id: int, service: PostServiceDep) -> list[Post]:
    """List posts written by one author, newest first."""
    return service.posts_by_author(author_id)


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: int, service: PostServiceDep) -> Post:
    """Get a specific post by ID.

    Args:
        post_id: ID of the post to retrieve
        service: Post service for the request

    Returns:
        The post with its attachments, comments, reactions, author and tags

    Raises:
        PostNotFoundError: If the post does not exist (rendered as 404)
    """
    return service.get_post(post_id)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(payload: PostPayload, service: PostServiceDep) -> Post:
    """Create a new post.

    Args:
        payload: Post body; ``author.id`` is required, attachment and tag ids are optional
        service: Post service for the request

    Returns:
        The stored post as read back after the insert

    Raises:
        PostValidationError: If content is blank, the author is missing or a
            referenced row does not exist (rendered as 400)
    """
    return service.create_post(payload.to_post())


@router.put("/{post_id}", response_model=Post)
def replace_post(post_id: int, payload: PostPayload, service: PostServiceDep) -> Post:
    """Replace a post's content, flags, attachments and tags.

    The id in the path wins over any id in the body.

    Raises:
        PostNotFoundError: If the post does not exist (rendered as 404)
        PostValidationError: If content is blank (rendered as 400)
    """
    return service.replace_post(post_id, payload.to_post(post_id))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: int, service: PostServiceDep) -> None:
    """Delete a post; deleting a missing post also answers 204."""
    service.delete_post(post_id)
