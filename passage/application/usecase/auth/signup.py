"""Local signup use case."""

import logfire
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from passage.application.usecase.base import BaseUseCase, SessionResponse
from passage.domain.service import SessionService, UserService


class SignupRequest(BaseModel):
    """Local signup request.

    Unknown fields (including `roles`) are dropped so callers cannot grant
    themselves roles.
    """

    model_config = ConfigDict(extra="ignore")

    username: str = Field(min_length=1, max_length=255)
    password: str
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None


class SignupUseCase(BaseUseCase):
    """Use case for creating a local account and signing it in."""

    def __init__(
        self,
        user_service: UserService,
        session_service: SessionService,
        password_min_length: int = 6,
    ) -> None:
        """Initialize signup use case.

        Args:
            user_service: User domain service
            session_service: Session domain service
            password_min_length: Minimum accepted password length
        """
        self.user_service = user_service
        self.session_service = session_service
        self.password_min_length = password_min_length

    async def execute(self, request: SignupRequest) -> SessionResponse:
        """Execute signup flow.

        Steps:
        1. Validate password length
        2. Create local user (hashes password, forces provider "local")
        3. Establish session

        Args:
            request: Signup request

        Returns:
            Session token and sanitized user

        Raises:
            ValueError: If the password is too short
            DuplicateUsernameError: If the username is taken
            StoreError: If saving fails
            SessionError: If the session cannot be established
        """
        with logfire.span("signup", username=request.username):
            if len(request.password) < self.password_min_length:
                raise ValueError(
                    f"Password should be at least {self.password_min_length} characters"
                )

            user = await self.user_service.create_local_user(
                username=request.username,
                password=request.password,
                email=str(request.email),
                first_name=request.first_name,
                last_name=request.last_name,
                display_name=request.display_name,
            )

            token = self.session_service.login(user)
            return SessionResponse(token=token, user=user.sanitized())
