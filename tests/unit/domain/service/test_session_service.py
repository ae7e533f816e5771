"""Unit tests for SessionService."""

from unittest.mock import MagicMock

import pytest

from passage.config import AuthSettings
from passage.domain.error import SessionError
from passage.domain.service import JWTService, SessionService
from passage.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(AuthSettings(jwt_secret="test-secret-that-is-long-enough-for-hs256"))


class TestSessionService:
    """Tests for SessionService."""

    @pytest.mark.asyncio
    async def test_login_token_resolves_to_user(self, jwt_service):
        """A token issued by login() should resolve back to the user."""
        # Arrange
        repo = InMemoryUserRepository()
        user = await repo.save(make_user())
        service = SessionService(jwt_service, repo)

        # Act
        token = service.login(user)
        resolved = await service.resolve(token)

        # Assert
        assert resolved == user

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    async def test_invalid_token_resolves_to_none(self, jwt_service, token):
        """Missing or malformed tokens mean no session."""
        service = SessionService(jwt_service, InMemoryUserRepository())

        assert await service.resolve(token) is None

    @pytest.mark.asyncio
    async def test_token_of_deleted_user_resolves_to_none(self, jwt_service):
        """Tokens of users missing from the store mean no session."""
        # Arrange
        service = SessionService(jwt_service, InMemoryUserRepository())
        token = service.login(make_user())

        # Act & Assert
        assert await service.resolve(token) is None

    def test_login_failure_raises_session_error(self):
        """Token issue failures should surface as SessionError."""
        # Arrange
        failing_jwt = MagicMock(spec=JWTService)
        failing_jwt.issue.side_effect = RuntimeError("key unavailable")
        service = SessionService(failing_jwt, InMemoryUserRepository())

        # Act & Assert
        with pytest.raises(SessionError):
            service.login(make_user())
