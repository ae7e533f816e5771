"""Local sign-in use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase, SessionResponse
from passage.domain.service import AuthService, SessionService


class SigninRequest(BaseModel):
    """Local sign-in request."""

    username: str
    password: str


class SigninUseCase(BaseUseCase):
    """Use case for signing in with a username and password."""

    def __init__(
        self, auth_service: AuthService, session_service: SessionService
    ) -> None:
        """Initialize sign-in use case.

        Args:
            auth_service: Authentication domain service
            session_service: Session domain service
        """
        self.auth_service = auth_service
        self.session_service = session_service

    async def execute(self, request: SigninRequest) -> SessionResponse:
        """Verify credentials through the local strategy and sign in.

        Raises:
            InvalidCredentialsError: If the credentials do not match
            SessionError: If the session cannot be established
        """
        user = await self.auth_service.authenticate_local(
            request.username, request.password
        )
        token = self.session_service.login(user)
        return SessionResponse(token=token, user=user.sanitized())
