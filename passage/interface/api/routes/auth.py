"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from passage.application.usecase.auth import (
    GetCurrentUserUseCase,
    OAuthCallbackUseCase,
    SigninUseCase,
    SignupUseCase,
)
from passage.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from passage.application.usecase.auth.oauth_callback import OAuthCallbackRequest
from passage.application.usecase.auth.signin import SigninRequest
from passage.application.usecase.auth.signup import SignupRequest
from passage.config import Settings
from passage.domain.error import SessionError
from passage.domain.service import AuthService
from passage.interface.api.session import (
    clear_session_cookie,
    get_session_token,
    set_session_cookie,
)
from passage.interface.error import (
    GENERIC_ERROR_MESSAGE,
    error_response,
    get_error_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/signup")
async def signup(
    request: SignupRequest,
    signup_use_case: FromDishka[SignupUseCase],
    settings: FromDishka[Settings],
):
    """Create a local account and sign it in.

    Returns:
        The sanitized user with a session cookie, or a structured error
        payload with status 500

    Example:
        POST /auth/signup
        {
            "username": "alice",
            "password": "secret123",
            "email": "alice@example.com",
            "first_name": "Alice",
            "last_name": "Liddell"
        }
    """
    try:
        result = await signup_use_case.execute(request)
    except SessionError as e:
        logger.error(f"Session could not be established after signup: {e}")
        return error_response(GENERIC_ERROR_MESSAGE)
    except Exception as e:
        logger.warning(f"Signup failed for {request.username}: {e}")
        return error_response(get_error_message(e))

    response = JSONResponse(content=result.user)
    set_session_cookie(response, result.token, settings)
    return response


@router.post("/signin")
async def signin(
    request: SigninRequest,
    signin_use_case: FromDishka[SigninUseCase],
    settings: FromDishka[Settings],
):
    """Sign in with a username and password.

    Returns:
        The sanitized user with a session cookie, or a structured error
        payload with status 500
    """
    try:
        result = await signin_use_case.execute(request)
    except SessionError as e:
        logger.error(f"Session could not be established after signin: {e}")
        return error_response(GENERIC_ERROR_MESSAGE)
    except Exception as e:
        logger.info(f"Signin failed for {request.username}: {e}")
        return error_response(get_error_message(e))

    response = JSONResponse(content=result.user)
    set_session_cookie(response, result.token, settings)
    return response


@router.get("/signout")
async def signout(settings: FromDishka[Settings]) -> RedirectResponse:
    """Clear the session cookie and redirect home."""
    response = RedirectResponse(
        url=settings.auth.signout_redirect_url, status_code=status.HTTP_302_FOUND
    )
    clear_session_cookie(response, settings)
    return response


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> GetCurrentUserResponse:
    """Get current user if authenticated, or return unauthenticated status."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=get_session_token(request, settings))
    )


@router.get("/{provider}")
async def initiate_oauth(
    provider: str,
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the browser to the provider's authorization page.

    Example:
        GET /auth/github

        Redirects to: https://github.com/login/oauth/authorize?...
    """
    try:
        state = secrets.token_urlsafe(32)
        auth_url = await auth_service.initiate_login(provider, state)
    except Exception as e:
        logger.error(f"Failed to initiate {provider} login: {e}")
        return RedirectResponse(
            url=settings.auth.signin_redirect_url, status_code=status.HTTP_302_FOUND
        )

    logger.info(f"Initiating {provider} login")
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: str,
    request: Request,
    oauth_callback_use_case: FromDishka[OAuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
) -> RedirectResponse:
    """Handle the provider's OAuth callback.

    Signs the user in (or links the provider to the signed-in user) and
    redirects to the reconciliation's redirect hint. Any failure redirects
    to the sign-in page without error details.

    Example:
        GET /auth/github/callback?code=abc123&state=xyz789

        Redirects to: / (sign-in) or /account-settings (provider linked)
    """
    logger.info(f"OAuth callback received: provider={provider}")

    if not code or not state:
        # Provider refused the authorization (e.g. error=access_denied)
        logger.info(f"OAuth callback without code for {provider}")
        return RedirectResponse(
            url=settings.auth.signin_redirect_url, status_code=status.HTTP_302_FOUND
        )

    try:
        result = await oauth_callback_use_case.execute(
            OAuthCallbackRequest(
                provider=provider,
                code=code,
                state=state,
                session_token=get_session_token(request, settings),
            )
        )
    except Exception as e:
        logger.warning(f"OAuth callback failed for {provider}: {e}")
        return RedirectResponse(
            url=settings.auth.signin_redirect_url, status_code=status.HTTP_302_FOUND
        )

    logger.info(f"OAuth login successful for user: {result.username}")
    response = RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
    set_session_cookie(response, result.token, settings)
    return response
