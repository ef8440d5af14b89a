"""Database configuration and utilities."""

from .session import SessionLocal, get_db
from .transaction import transactional

__all__ = ["get_db", "SessionLocal", "transactional"]
