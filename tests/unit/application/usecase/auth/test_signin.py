"""Unit tests for SigninUseCase."""

from dishka import AsyncContainer
import pytest

from passage.application.usecase.auth import SigninUseCase
from passage.application.usecase.auth.signin import SigninRequest
from passage.domain.error import InvalidCredentialsError
from passage.domain.service import SessionService, UserService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSigninUseCase:
    """Tests for SigninUseCase."""

    @pytest.mark.asyncio
    async def test_signin_returns_session_for_valid_credentials(
        self, unit_env: AsyncContainer
    ):
        """Valid credentials should produce a session for the user."""
        # Arrange
        user_service = await unit_env.get(UserService)
        session_service = await unit_env.get(SessionService)
        use_case = await unit_env.get(SigninUseCase)
        user = await user_service.create_local_user(
            username="alice", password="secret123"
        )

        # Act
        response = await use_case.execute(
            SigninRequest(username="alice", password="secret123")
        )

        # Assert
        assert response.user["id"] == str(user.id)
        assert "password_hash" not in response.user
        resolved = await session_service.resolve(response.token)
        assert resolved.id == user.id

    @pytest.mark.asyncio
    async def test_signin_rejects_wrong_password(self, unit_env: AsyncContainer):
        """Wrong password should raise InvalidCredentialsError."""
        # Arrange
        user_service = await unit_env.get(UserService)
        use_case = await unit_env.get(SigninUseCase)
        await user_service.create_local_user(username="alice", password="secret123")

        # Act & Assert
        with pytest.raises(InvalidCredentialsError):
            await use_case.execute(SigninRequest(username="alice", password="nope"))
