"""Explicit transaction scope for multi-statement writes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.core.errors import PostValidationError, StorageError

logger = logging.getLogger(__name__)


@contextmanager
def transactional(session: Session) -> Iterator[Session]:
    """Run the enclosed statements as one unit of work.

    Commits when the block exits normally. Any error rolls back every statement
    issued since the session's last commit and is re-raised; integrity
    violations become ``PostValidationError`` and other database errors become
    ``StorageError``. Nothing here retries: a failed write may or may not have
    reached the server, and replaying an insert could duplicate rows.

    Args:
        session: Request-scoped session that owns the connection.

    Yields:
        The same session, for convenience.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Write rejected by integrity constraint: %s", exc.orig)
        raise PostValidationError(
            "Write references a missing author, attachment or tag"
        ) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Transaction failed and was rolled back")
        raise StorageError("Database transaction failed") from exc
    except Exception:
        session.rollback()
        raise
