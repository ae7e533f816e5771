"""Interface layer errors and error payloads."""

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from passage.domain.error import DomainError, DuplicateUsernameError

GENERIC_ERROR_MESSAGE = "Internal server error"


class ErrorResponse(BaseModel):
    """Structured error payload returned by API endpoints."""

    type: str
    description: str


def _first_validation_message(errors) -> str:
    if not errors:
        return GENERIC_ERROR_MESSAGE
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", GENERIC_ERROR_MESSAGE)
    return f"{location}: {message}" if location else message


def get_error_message(exc: BaseException | None) -> str:
    """Turn an error into a message safe to show to API clients.

    Args:
        exc: The error (None when a strategy failed without one)

    Returns:
        Human-readable message
    """
    if exc is None:
        return GENERIC_ERROR_MESSAGE
    if isinstance(exc, DuplicateUsernameError):
        return "Username already exists"
    if isinstance(exc, (ValidationError, RequestValidationError)):
        return _first_validation_message(exc.errors())
    if isinstance(exc, (DomainError, ValueError)):
        return str(exc) or GENERIC_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


def error_response(
    description: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    error_type: str = "INTERNAL_SERVER_ERROR",
) -> JSONResponse:
    """Build a structured error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(type=error_type, description=description).model_dump(),
    )


async def request_validation_handler(
    request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies with the structured error payload."""
    _ = request
    return error_response(get_error_message(exc))
