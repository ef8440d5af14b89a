"""Column types shared by the ORM models."""

from sqlalchemy import BigInteger, Integer

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
BigIntegerId = BigInteger().with_variant(Integer, "sqlite")
