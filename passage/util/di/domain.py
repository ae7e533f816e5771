"""Domain layer DI providers."""

from dishka import Scope, provide

from passage.config import AuthSettings
from passage.domain.repository import UserRepository
from passage.domain.service import (
    AuthService,
    IdentityReconciler,
    JWTService,
    OAuthClient,
    SessionService,
    UserService,
)
from passage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self,
        oauth_clients: dict[str, OAuthClient],
        user_repository: UserRepository,
    ) -> AuthService:
        """Provide authentication strategy dispatcher."""
        return AuthService(
            oauth_clients=oauth_clients, user_repository=user_repository
        )

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_session_service(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            jwt_service=jwt_service, user_repository=user_repository
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_identity_reconciler(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> IdentityReconciler:
        """Provide identity reconciliation domain service."""
        return IdentityReconciler(
            user_repository=user_repository,
            link_redirect=auth_settings.link_redirect_url,
        )
