"""Domain model entities for Passage."""

from passage.domain.model.user import User

__all__ = [
    "User",
]
