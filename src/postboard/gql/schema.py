"""GraphQL schema and FastAPI router for posts.

Resolvers delegate to :class:`PostService` exactly like the REST endpoints.
``PostboardError`` raised by the service reaches the client as a field error
whose ``extensions.code`` is the error kind name.
"""

import logging
from typing import Any

import strawberry
from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from postboard.core.settings import settings
from postboard.db.session import get_db
from postboard.gql.types import CreatePostInput, PostNode, UpdatePostInput
from postboard.repositories.post_repo import PostRepository
from postboard.schemas.media import Media, Tag
from postboard.schemas.post import Post
from postboard.schemas.user import User
from postboard.services.post_service import PostService

logger = logging.getLogger(__name__)


def _service(info: Info) -> PostService:
    return info.context["post_service"]


def _nodes(posts: list[Post]) -> list[PostNode]:
    return [PostNode.from_domain(post) for post in posts]


@strawberry.type
class Query:
    @strawberry.field
    def posts(self, info: Info) -> list[PostNode]:
        """All posts, newest first."""
        return _nodes(_service(info).list_posts())

    @strawberry.field
    def post(self, info: Info, id: int) -> PostNode:
        """One post; a missing id is a NOT_FOUND error."""
        return PostNode.from_domain(_service(info).get_post(id))

    @strawberry.field
    def posts_by_author(self, info: Info, author_id: int) -> list[PostNode]:
        return _nodes(_service(info).posts_by_author(author_id))

    @strawberry.field
    def search_posts(self, info: Info, keyword: str) -> list[PostNode]:
        """Posts whose content contains ``keyword``, ignoring case."""
        return _nodes(_service(info).search_posts(keyword))


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_post(self, info: Info, input: CreatePostInput) -> PostNode:
        post = Post(
            content=input.content,
            draft=input.draft,
            visibility=input.visibility,
            author=User(id=input.author_id),
            attachments=tuple(Media(id=media_id) for media_id in input.attachment_ids),
            tags=tuple(Tag(id=tag_id) for tag_id in input.tag_ids),
        )
        return PostNode.from_domain(_service(info).create_post(post))

    @strawberry.mutation
    def update_post(self, info: Info, id: int, input: UpdatePostInput) -> PostNode:
        updated = _service(info).update_post(
            id,
            content=input.content,
            draft=input.draft,
            visibility=input.visibility,
            attachment_ids=input.attachment_ids,
            tag_ids=input.tag_ids,
        )
        return PostNode.from_domain(updated)

    @strawberry.mutation
    def delete_post(self, info: Info, id: int) -> bool:
        _service(info).delete_post(id)
        return True


schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_context(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Per-request GraphQL context carrying a service bound to the request's session."""
    return {"post_service": PostService(PostRepository(db))}


def build_graphql_router() -> GraphQLRouter:
    """Return the router serving ``schema``; mount it at ``settings.graphql_path``."""
    logger.debug("GraphiQL enabled: %s", settings.graphiql_enabled)
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql_enabled else None,
    )
