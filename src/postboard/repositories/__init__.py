"""Data access layer for posts."""

from .post_repo import PostRepository

__all__ = ["PostRepository"]
