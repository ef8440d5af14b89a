"""Error taxonomy shared by the data access layer and both front ends."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Classification every front end translates to its own wire form."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILURE = "validation_failure"
    MAPPING_FAILURE = "mapping_failure"
    STORAGE_FAILURE = "storage_failure"


class PostboardError(RuntimeError):
    """Base exception for failures surfaced to API callers."""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions; picked up by the executor for field errors."""
        return {"code": self.kind.name}


class PostNotFoundError(PostboardError):
    """Raised when a requested post id has no matching row."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post not found: {post_id}")
        self.post_id = post_id


class PostValidationError(PostboardError):
    """Raised when a write is missing required data or references unknown rows."""

    kind = ErrorKind.VALIDATION_FAILURE


class MappingError(PostboardError):
    """Raised when a stored row cannot be turned into a domain object."""

    kind = ErrorKind.MAPPING_FAILURE

    def __init__(self, row_id: Any, reason: str) -> None:
        super().__init__(f"Cannot map post row {row_id}: {reason}")
        self.row_id = row_id
        self.reason = reason


class StorageError(PostboardError):
    """Raised when the database connection or transaction fails."""

    kind = ErrorKind.STORAGE_FAILURE
