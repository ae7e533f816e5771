"""User account routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from passage.application.usecase.user import UnlinkProviderUseCase
from passage.application.usecase.user.unlink_provider import UnlinkProviderRequest
from passage.config import Settings
from passage.domain.error import PreconditionError, SessionError
from passage.domain.service import SessionService
from passage.interface.api.session import get_session_token, set_session_cookie
from passage.interface.error import (
    GENERIC_ERROR_MESSAGE,
    error_response,
    get_error_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.delete("/accounts")
async def remove_oauth_provider(
    request: Request,
    session_service: FromDishka[SessionService],
    unlink_provider_use_case: FromDishka[UnlinkProviderUseCase],
    settings: FromDishka[Settings],
    provider: str | None = None,
):
    """Remove an additional OAuth provider from the signed-in user.

    Example:
        DELETE /users/accounts?provider=github
    """
    user = await session_service.resolve(get_session_token(request, settings))
    if user is None:
        return error_response(
            "User is not logged in",
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_type="UNAUTHORIZED",
        )

    try:
        result = await unlink_provider_use_case.execute(
            UnlinkProviderRequest(user=user, provider=provider)
        )
    except PreconditionError as e:
        return error_response(
            str(e), status_code=status.HTTP_400_BAD_REQUEST, error_type="BAD_REQUEST"
        )
    except SessionError as e:
        logger.error(f"Session could not be re-established after unlink: {e}")
        return error_response(GENERIC_ERROR_MESSAGE)
    except Exception as e:
        logger.error(f"Failed to unlink {provider} from user {user.id}: {e}")
        return error_response(get_error_message(e))

    response = JSONResponse(content=result.user)
    set_session_cookie(response, result.token, settings)
    return response
