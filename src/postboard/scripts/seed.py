"""Create the schema and load the sample blog data set."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from postboard.core.logging import configure_logging
from postboard.db.session import SessionLocal, create_tables, drop_tables
from postboard.db.transaction import transactional
from postboard.models import Comment, Post, Profile, Reaction, ReactionType, Role, Tag, User, Visibility

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    ("danvega", "dan@danvega.dev", Role.ADMIN, "Dan Vega", "Spring Developer Advocate & Content Creator"),
    ("javadev", "java@example.com", Role.USER, "Java Developer", "Passionate about JVM technologies"),
    ("springfan", "spring@example.com", Role.USER, "Spring Fan", "Building awesome apps with Spring Boot"),
]
SAMPLE_TAGS = ["java", "spring", "ai", "springboot", "programming"]
# Tags attached to every sample post.
POST_TAGS = ["java", "spring", "ai"]
# (author index, content, comment author index, comment)
SAMPLE_POSTS = [
    (
        0,
        "Just released Spring Boot 3.2! The virtual threads support is amazing. "
        "Check out the new features! #spring #java",
        1,
        "Great overview! Looking forward to trying virtual threads.",
    ),
    (
        1,
        "Working on migrating our application to Java 21. Pattern matching in switch "
        "statements is a game changer! #java",
        2,
        "Pattern matching has simplified my code so much!",
    ),
    (
        2,
        "Building an AI-powered code review bot using Spring AI. The possibilities are "
        "endless! #ai #spring",
        0,
        "Are you using the ChatGPT API for this?",
    ),
    (
        0,
        "Spring Security 6.2 brings excellent improvements to OAuth2 resource server "
        "support. Time to upgrade! #spring #security",
        1,
        "Security improvements are always welcome!",
    ),
    (
        1,
        "Exploring Project Loom and virtual threads in Spring Boot 3.2. The performance "
        "improvements are incredible! #java #spring",
        2,
        "The throughput increase is remarkable!",
    ),
]


def load_sample_data(session: Session) -> int:
    """Insert the sample users, tags, posts, comments and reactions.

    Does nothing when users already exist.

    Returns:
        Number of posts inserted.
    """
    if session.scalars(select(User.id).limit(1)).first() is not None:
        logger.info("Sample data already present; skipping")
        return 0

    with transactional(session):
        users = []
        for username, email, role, display_name, bio in SAMPLE_USERS:
            user = User(
                username=username,
                email=email,
                hashed_password="$2a$12$encrypted",
                role=role,
            )
            user.profile = Profile(display_name=display_name, bio=bio)
            users.append(user)
        session.add_all(users)

        tags = {name: Tag(name=name) for name in SAMPLE_TAGS}
        session.add_all(tags.values())

        posts = []
        for author_index, content, commenter_index, comment in SAMPLE_POSTS:
            post = Post(
                content=content,
                author=users[author_index],
                visibility=Visibility.PUBLIC,
                tags=[tags[name] for name in POST_TAGS],
            )
            post.comments.append(Comment(content=comment, author=users[commenter_index]))
            post.reactions.extend(Reaction(type=ReactionType.LIKE, user=user) for user in users)
            posts.append(post)
        session.add_all(posts)

    logger.info("Loaded %d users, %d tags and %d posts", len(users), len(tags), len(posts))
    return len(posts)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the schema and load sample posts")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop every table before recreating the schema.",
    )
    args = parser.parse_args()

    configure_logging()
    if args.reset:
        drop_tables()
    create_tables()
    with SessionLocal() as session:
        load_sample_data(session)


if __name__ == "__main__":
    main()
