"""Session token domain service."""

import logfire

from passage.config import AuthSettings
from passage.util.jwt import SessionClaims, decode_session_token, encode_session_token

from .base import Service


class JWTService(Service):
    """Issues and verifies signed session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def issue(self, user_id: str, username: str) -> str:
        """Sign a session token for the user."""
        token = encode_session_token(user_id, username, self.auth_settings)
        logfire.debug("Session token issued", user_id=user_id)
        return token

    def decode(self, token: str) -> SessionClaims:
        """Verify a session token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        return decode_session_token(token, self.auth_settings)
