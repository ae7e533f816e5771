"""OAuth callback use case."""

import logfire
from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.service import (
    AuthService,
    IdentityReconciler,
    SessionService,
)


class OAuthCallbackRequest(BaseModel):
    """OAuth callback parameters.

    `session_token` is the caller's current session cookie, if any; when it
    resolves to a user the provider is linked to that user instead of being
    used to sign in.
    """

    provider: str
    code: str
    state: str
    session_token: str | None = None


class OAuthCallbackResponse(BaseModel):
    """OAuth callback response."""

    token: str
    user_id: str
    username: str
    redirect_url: str


class OAuthCallbackUseCase(BaseUseCase):
    """Use case for completing OAuth sign-in or provider linking."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
        default_redirect_url: str = "/",
    ) -> None:
        """Initialize OAuth callback use case.

        Args:
            auth_service: Authentication domain service (dispatches to providers)
            identity_reconciler: Identity reconciliation domain service
            session_service: Session domain service
            default_redirect_url: Redirect used when reconciliation gives no hint
        """
        self.auth_service = auth_service
        self.identity_reconciler = identity_reconciler
        self.session_service = session_service
        self.default_redirect_url = default_redirect_url

    async def execute(self, request: OAuthCallbackRequest) -> OAuthCallbackResponse:
        """Execute OAuth callback flow.

        Steps:
        1. Complete OAuth with the provider's client
        2. Resolve the current session user, if any
        3. Reconcile the provider profile (find, create or link)
        4. Establish a session for the resolved user

        Raises:
            UnsupportedProviderError: If no client is registered for the provider
            ProviderError: If the provider rejects the authorization
            AlreadyConnectedError: If the session user already uses the provider
            StoreError: If the store fails
            SessionError: If the session cannot be established
        """
        with logfire.span("oauth_callback", provider=request.provider):
            profile = await self.auth_service.complete_login(
                request.provider, request.code, request.state
            )

            logfire.info(
                "OAuth completed",
                provider=profile.provider,
                identifier=str(profile.identifier),
            )

            session_user = await self.session_service.resolve(request.session_token)
            result = await self.identity_reconciler.reconcile(session_user, profile)

            token = self.session_service.login(result.user)

            return OAuthCallbackResponse(
                token=token,
                user_id=str(result.user.id),
                username=result.user.username,
                redirect_url=result.redirect_hint or self.default_redirect_url,
            )
