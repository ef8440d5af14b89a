"""HTTP API routers."""

from .endpoints import posts_router

__all__ = ["posts_router"]
