"""Unit tests for API error formatting."""

import json

import pytest
from pydantic import BaseModel, ValidationError

from passage.domain.error import (
    AlreadyConnectedError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    StoreError,
)
from passage.interface.error import (
    GENERIC_ERROR_MESSAGE,
    error_response,
    get_error_message,
)
from tests.conftest import make_user


class _Payload(BaseModel):
    email: str


class TestGetErrorMessage:
    """Tests for get_error_message()."""

    def test_duplicate_username(self):
        """Duplicate usernames get a fixed message."""
        assert get_error_message(DuplicateUsernameError("alice")) == (
            "Username already exists"
        )

    def test_validation_error_uses_first_message(self):
        """Validation errors report the first failing field."""
        with pytest.raises(ValidationError) as exc_info:
            _Payload.model_validate({})

        message = get_error_message(exc_info.value)

        assert message.startswith("email: ")
        assert "required" in message.lower()

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (InvalidCredentialsError(), "Unknown user or invalid password"),
            (
                AlreadyConnectedError(make_user(), "github"),
                "User is already connected using this provider",
            ),
            (ValueError("Password should be at least 6 characters"),
             "Password should be at least 6 characters"),
            (StoreError(), GENERIC_ERROR_MESSAGE),
        ],
    )
    def test_domain_errors_use_their_message(self, exc, expected):
        """Domain errors are reported with their own message."""
        assert get_error_message(exc) == expected

    @pytest.mark.parametrize("exc", [None, RuntimeError("db password=hunter2")])
    def test_unexpected_errors_get_generic_message(self, exc):
        """Unexpected errors must not leak details."""
        assert get_error_message(exc) == GENERIC_ERROR_MESSAGE


class TestErrorResponse:
    """Tests for error_response()."""

    def test_structured_payload(self):
        """Payload should carry type and description."""
        response = error_response("Username already exists")

        assert response.status_code == 500
        assert json.loads(response.body) == {
            "type": "INTERNAL_SERVER_ERROR",
            "description": "Username already exists",
        }
