"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire

from passage.domain.model import User
from passage.domain.value import ProviderProfile, UserId

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


def make_user(
    username: str = "alice",
    provider: str = "local",
    provider_data: dict[str, Any] | None = None,
    additional_providers_data: dict[str, dict[str, Any]] | None = None,
    **kwargs: Any,
) -> User:
    """Helper function to build users for tests."""
    now = datetime.now(timezone.utc)
    return User(
        id=UserId(uuid4()),
        username=username,
        provider=provider,
        provider_data=provider_data or {},
        additional_providers_data=additional_providers_data or {},
        created_at=now,
        updated_at=now,
        **kwargs,
    )


def make_profile(
    provider: str = "github",
    identifier: Any = 42,
    email: str | None = "a@b.com",
    username: str | None = None,
    display_name: str | None = "Alice",
) -> ProviderProfile:
    """Helper function to build provider profiles for tests."""
    return ProviderProfile(
        provider=provider,
        provider_identifier_field="id",
        provider_data={"id": identifier},
        display_name=display_name,
        email=email,
        username=username,
    )

