"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from passage.domain.model.user import User
from passage.domain.value import ProviderIdentityQuery, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer and raise StoreError
    (or DuplicateUsernameError) when the underlying store fails.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, query: ProviderIdentityQuery
    ) -> Optional[User]:
        """Find the user owning a provider identity.

        The identity may be the user's primary provider or one of their
        additional linked providers.

        Args:
            query: Provider identity lookup

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            DuplicateUsernameError: If another user already has the username
            StoreError: If the store fails
        """
        pass

    async def find_unique_username(
        self, candidate: str, suffix: Optional[int] = None
    ) -> str:
        """Find an available username derived from a candidate.

        Tries `candidate`, then `candidate1`, `candidate2`, ... starting
        from `suffix` when given.

        Args:
            candidate: Desired username
            suffix: Numeric suffix to start from

        Returns:
            First username not taken by another user
        """
        while True:
            possible = candidate + (str(suffix) if suffix else "")
            if await self.find_by_username(possible) is None:
                return possible
            suffix = (suffix or 0) + 1
