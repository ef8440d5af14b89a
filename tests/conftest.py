# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from postboard.db.session import Base, enable_sqlite_foreign_keys
from postboard.db.session import get_db as app_get_session
from postboard.main import app as fastapi_app
from postboard.models import (
    Comment,
    Media,
    MediaType,
    Post,
    Reaction,
    ReactionType,
    Role,
    Tag,
    User,
    Visibility,
)
from postboard.repositories.post_repo import PostRepository

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2024, 3, 1, 12, 0, 0)

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Repository writes commit, so each test wipes every table afterwards.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def repo(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique names."""

    def _make(username: str | None = None, role: Role = Role.USER) -> User:
        n = next(_USER_COUNTER)
        name = username or f"user{n}"
        user = User(
            username=name,
            email=f"{name}-{n}@example.com",
            hashed_password="$2a$12$encrypted",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    """Primary author."""
    return make_user("danvega", Role.ADMIN)


@pytest.fixture()
def other_author(make_user: Callable[..., User]) -> User:
    """Secondary author."""
    return make_user("javadev")


@pytest.fixture()
def tags(db_session: Session) -> dict[str, Tag]:
    """Persist the sample tag set keyed by name."""
    created = {name: Tag(name=name) for name in ("java", "spring", "ai", "springboot")}
    db_session.add_all(created.values())
    db_session.commit()
    return created


@pytest.fixture()
def media(db_session: Session) -> list[Media]:
    """Persist two attachments."""
    items = [
        Media(
            url="https://cdn.example.com/boot.png",
            media_type=MediaType.IMAGE,
            size=2048,
            content_type="image/png",
        ),
        Media(
            url="https://cdn.example.com/talk.mp4",
            media_type=MediaType.VIDEO,
            size=10_485_760,
            content_type="video/mp4",
        ),
    ]
    db_session.add_all(items)
    db_session.commit()
    return items


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists posts directly through the ORM."""

    def _make(
        author: User,
        content: str = "Test post content",
        *,
        minutes: int = 0,
        tags: list[Tag] | None = None,
        attachments: list[Media] | None = None,
        visibility: Visibility = Visibility.PUBLIC,
        draft: bool = False,
    ) -> Post:
        post = Post(
            content=content,
            author_id=author.id,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            visibility=visibility,
            draft=draft,
            tags=list(tags or []),
            attachments=list(attachments or []),
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def add_comment(db_session: Session) -> Callable[..., Comment]:
    def _add(post: Post, author: User, content: str = "Nice post!", minutes: int = 1) -> Comment:
        comment = Comment(
            content=content,
            post_id=post.id,
            author_id=author.id,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _add


@pytest.fixture()
def add_reaction(db_session: Session) -> Callable[..., Reaction]:
    def _add(
        user: User,
        *,
        post: Post | None = None,
        comment: Comment | None = None,
        kind: ReactionType = ReactionType.LIKE,
    ) -> Reaction:
        reaction = Reaction(
            type=kind,
            user_id=user.id,
            post_id=post.id if post else None,
            comment_id=comment.id if comment else None,
        )
        db_session.add(reaction)
        db_session.commit()
        return reaction

    return _add


@pytest.fixture()
def busy_post(
    make_post: Callable[..., Post],
    add_comment: Callable[..., Comment],
    add_reaction: Callable[..., Reaction],
    author: User,
    other_author: User,
    tags: dict[str, Tag],
    media: list[Media],
) -> Post:
    """A post with two tags, two attachments, two comments and three reactions."""
    post = make_post(
        author,
        "Just released Spring Boot 3.2!",
        tags=[tags["java"], tags["spring"]],
        attachments=media,
    )
    first = add_comment(post, other_author, "Great overview!", minutes=1)
    add_comment(post, author, "Thanks!", minutes=2)
    add_reaction(author, post=post)
    add_reaction(other_author, post=post, kind=ReactionType.LOVE)
    add_reaction(author, post=post, kind=ReactionType.LAUGH)
    # Reactions on comments belong to the comment, not to the post.
    add_reaction(author, comment=first)
    return post


@pytest.fixture()
def graphql(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that POSTs a GraphQL document and decodes the response body."""

    def _execute(query: str, **variables: Any) -> dict[str, Any]:
        response = client.post("/graphql", json={"query": query, "variables": variables})
        assert response.status_code == 200, response.text
        return response.json()

    return _execute
