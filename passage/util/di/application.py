"""Application layer DI providers."""

from dishka import Scope, provide

from passage.application.usecase.auth import (
    GetCurrentUserUseCase,
    OAuthCallbackUseCase,
    SigninUseCase,
    SignupUseCase,
)
from passage.application.usecase.user import UnlinkProviderUseCase
from passage.config import AuthSettings
from passage.domain.service import (
    AuthService,
    IdentityReconciler,
    SessionService,
    UserService,
)
from passage.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_signup_use_case(
        self,
        user_service: UserService,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            user_service=user_service,
            session_service=session_service,
            password_min_length=auth_settings.password_min_length,
        )

    @provide(scope=Scope.REQUEST)
    def get_signin_use_case(
        self, auth_service: AuthService, session_service: SessionService
    ) -> SigninUseCase:
        """Provide signin use case."""
        return SigninUseCase(
            auth_service=auth_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_oauth_callback_use_case(
        self,
        auth_service: AuthService,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
        auth_settings: AuthSettings,
    ) -> OAuthCallbackUseCase:
        """Provide OAuth callback use case."""
        return OAuthCallbackUseCase(
            auth_service=auth_service,
            identity_reconciler=identity_reconciler,
            session_service=session_service,
            default_redirect_url=auth_settings.default_redirect_url,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, session_service: SessionService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(session_service=session_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_unlink_provider_use_case(
        self,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
    ) -> UnlinkProviderUseCase:
        """Provide unlink provider use case."""
        return UnlinkProviderUseCase(
            identity_reconciler=identity_reconciler,
            session_service=session_service,
        )
