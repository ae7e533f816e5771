"""Unlink OAuth provider use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase, SessionResponse
from passage.domain.model import User
from passage.domain.service import IdentityReconciler, SessionService


class UnlinkProviderRequest(BaseModel):
    """Unlink provider request."""

    user: User | None  # From the authenticated session
    provider: str | None


class UnlinkProviderUseCase(BaseUseCase):
    """Use case for removing an additional OAuth provider from an account.

    The session is re-established afterwards so it reflects the updated user.
    """

    def __init__(
        self,
        identity_reconciler: IdentityReconciler,
        session_service: SessionService,
    ) -> None:
        """Initialize unlink provider use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
            session_service: Session domain service
        """
        self.identity_reconciler = identity_reconciler
        self.session_service = session_service

    async def execute(self, request: UnlinkProviderRequest) -> SessionResponse:
        """Execute unlink flow.

        Raises:
            PreconditionError: If user or provider is missing
            StoreError: If saving fails
            SessionError: If the session cannot be re-established
        """
        user = await self.identity_reconciler.unlink(request.user, request.provider)
        token = self.session_service.login(user)
        return SessionResponse(token=token, user=user.sanitized())
