"""Session cookie helpers for API routes."""

from fastapi import Request, Response

from passage.config import Settings


def get_session_token(request: Request, settings: Settings) -> str | None:
    """Read the session token from the request cookies."""
    return request.cookies.get(settings.auth.cookie_name)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token to a response as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie (same path as when it was created)."""
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
