"""Session token encoding with PyJWT."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from passage.config import AuthSettings


class SessionClaims(BaseModel):
    """Claims carried by a session token."""

    sub: str  # User ID
    username: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """Session token could not be decoded or has expired."""

    pass


def encode_session_token(user_id: str, username: str, settings: AuthSettings) -> str:
    """Sign a session token for the user, valid for `jwt_expiry_days`."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify a session token's signature and expiry.

    Raises:
        JWTError: If the token is expired, tampered with or malformed
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return SessionClaims.model_validate(claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Session token has expired") from e
    except (jwt.InvalidTokenError, ValidationError) as e:
        raise JWTError("Invalid session token") from e
