"""Session domain service.

A session is a signed token naming the authenticated user. The interface
layer carries it in an HTTP-only cookie.
"""

from uuid import UUID

import logfire

from passage.domain.error import SessionError
from passage.domain.model import User
from passage.domain.repository import UserRepository
from passage.domain.value import UserId
from passage.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class SessionService(Service):
    """Establishes and resolves user sessions."""

    def __init__(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> None:
        """Initialize session service.

        Args:
            jwt_service: JWT token domain service
            user_repository: User repository
        """
        self.jwt_service = jwt_service
        self.user_repository = user_repository

    def login(self, user: User) -> str:
        """Establish a session for the user.

        Args:
            user: Authenticated user

        Returns:
            Session token

        Raises:
            SessionError: If the token cannot be issued
        """
        with logfire.span("session_service.login", user_id=str(user.id)):
            try:
                return self.jwt_service.issue(str(user.id), user.username)
            except Exception as e:
                logfire.error(
                    "Session login failed", user_id=str(user.id), error=str(e)
                )
                raise SessionError(f"Failed to establish session: {e}") from e

    async def resolve(self, token: str | None) -> User | None:
        """Resolve the user of a session token.

        Invalid, expired or orphaned tokens resolve to None.

        Args:
            token: Session token (optional)

        Returns:
            The session user, or None when unauthenticated
        """
        if not token:
            return None

        try:
            claims = self.jwt_service.decode(token)
            user_id = UserId(UUID(claims.sub))
        except (JWTError, ValueError) as e:
            logfire.debug("Session token rejected", error=str(e))
            return None

        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("Session user not found", user_id=str(user_id))
        return user
