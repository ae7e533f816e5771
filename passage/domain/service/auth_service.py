"""Authentication domain service."""

import logfire

from passage.domain.error import InvalidCredentialsError, UnsupportedProviderError
from passage.domain.model import User
from passage.domain.repository import UserRepository
from passage.domain.value import LOCAL_PROVIDER, ProviderProfile
from passage.util.password import verify_password

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ProviderProfile:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Normalized provider profile
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service dispatching authentication to strategies.

    The "local" strategy verifies a username and password against the user
    store. Every other strategy name is an OAuth provider with its own client.
    """

    def __init__(
        self,
        oauth_clients: dict[str, OAuthClient],
        user_repository: UserRepository,
    ) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider name to OAuth client implementation
            user_repository: User repository for local credentials
        """
        self.oauth_clients = oauth_clients
        self.user_repository = user_repository

    def _get_client(self, provider: str) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise UnsupportedProviderError(provider)
        return client

    async def authenticate_local(self, username: str, password: str) -> User:
        """Verify local credentials.

        Args:
            username: Username
            password: Plain-text password

        Returns:
            The matching local user

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        with logfire.span("auth_service.authenticate_local", username=username):
            user = await self.user_repository.find_by_username(username)
            if (
                not user
                or user.provider != LOCAL_PROVIDER
                or not user.password_hash
                or not user.salt
                or not verify_password(password, user.salt, user.password_hash)
            ):
                logfire.warn("Local authentication failed", username=username)
                raise InvalidCredentialsError()

            logfire.info("Local authentication succeeded", user_id=str(user.id))
            return user

    async def initiate_login(self, provider: str, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Provider name
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        return await self._get_client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: str, code: str, state: str
    ) -> ProviderProfile:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Provider name
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Normalized provider profile

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        return await self._get_client(provider).complete_authorization(code, state)
