"""Get current user use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.service import SessionService


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str | None = None  # Session token from cookie


class GetCurrentUserResponse(BaseModel):
    """Authentication status with the sanitized user when signed in."""

    authenticated: bool
    user: dict | None = None


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the current authenticated user."""

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Resolve the session; invalid sessions are reported as unauthenticated."""
        user = await self.session_service.resolve(request.token)
        if user is None:
            return GetCurrentUserResponse(authenticated=False)
        return GetCurrentUserResponse(authenticated=True, user=user.sanitized())
