"""Repository interfaces for Passage domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from passage.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
]
