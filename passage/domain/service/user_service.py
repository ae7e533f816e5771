"""User domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from passage.domain.model import User
from passage.domain.repository import UserRepository
from passage.domain.value import LOCAL_PROVIDER, UserId
from passage.util.password import generate_salt, hash_password

from .base import Service


class UserService(Service):
    """Domain service for local user accounts."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def create_local_user(
        self,
        username: str,
        password: str,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        display_name: str | None = None,
    ) -> User:
        """Create a password-based user account.

        Roles are never taken from the caller: local users get the default
        role set.

        Args:
            username: Desired username (must be unused)
            password: Plain-text password, hashed before storage
            email: Email address
            first_name: First name
            last_name: Last name
            display_name: Display name, defaults to "first last"

        Returns:
            Saved user

        Raises:
            DuplicateUsernameError: If the username is taken
            StoreError: If the store fails
        """
        with logfire.span("user_service.create_local_user", username=username):
            if display_name is None:
                display_name = " ".join(
                    part for part in (first_name, last_name) if part
                ) or None

            salt = generate_salt()
            now = datetime.now(timezone.utc)
            user = User(
                id=UserId(uuid4()),
                username=username,
                display_name=display_name,
                first_name=first_name,
                last_name=last_name,
                email=email,
                provider=LOCAL_PROVIDER,
                password_hash=hash_password(password, salt),
                salt=salt,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "Local user created", user_id=str(saved.id), username=saved.username
            )
            return saved
