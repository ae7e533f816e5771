"""In-memory user repository for testing."""

from typing import Optional

from passage.domain.error import DuplicateUsernameError
from passage.domain.model.user import User
from passage.domain.repository.user import UserRepository
from passage.domain.value import ProviderIdentityQuery, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_identity(
        self, query: ProviderIdentityQuery
    ) -> Optional[User]:
        """Find the user owning a provider identity (primary or additional)."""
        for user in self._users.values():
            if query.matches_primary(
                user.provider, user.provider_data
            ) or query.matches_additional(user.additional_providers_data):
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user, enforcing unique usernames."""
        for other in self._users.values():
            if other.id != user.id and other.username == user.username:
                raise DuplicateUsernameError(user.username)
        self._users[user.id] = user
        return user
