"""Conversion between `users` rows and the User aggregate.

User is an immutable pydantic model, so rows are mapped by hand instead of
through an ORM mapping.
"""

from collections.abc import Mapping
from typing import Any

from passage.domain.model import User


def row_to_user(row: Mapping[str, Any]) -> User:
    """Build a User from a `users` row.

    JSONB columns arrive as dicts and `roles` as a list; NULLs fall back to
    the model defaults.
    """
    data = {key: value for key, value in row.items() if value is not None}
    return User.model_validate(data)


def user_to_dict(user: User) -> dict[str, Any]:
    """Column values for inserting or updating a user."""
    return user.model_dump()
