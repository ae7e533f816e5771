"""PostgreSQL repository implementations."""

from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
