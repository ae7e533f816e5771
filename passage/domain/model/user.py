"""User aggregate root.

Users sign up locally or through an OAuth provider (their primary provider)
and may link any number of additional OAuth providers afterwards.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from passage.domain.model.common import DomainModel
from passage.domain.value import UserId


class User(DomainModel):
    """User aggregate root.

    A provider name appears at most once across `provider` and the keys of
    `additional_providers_data`.
    """

    id: UserId
    username: str
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    provider: str  # Primary provider ("local" for password accounts)
    provider_data: dict[str, Any] = Field(default_factory=dict)
    additional_providers_data: dict[str, dict[str, Any]] = Field(
        default_factory=dict
    )
    roles: list[str] = Field(default_factory=lambda: ["user"])
    password_hash: Optional[str] = None  # Local accounts only
    salt: Optional[str] = None  # Local accounts only
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def has_provider(self, provider: str) -> bool:
        """Whether the provider is primary or already linked."""
        return self.provider == provider or provider in self.additional_providers_data

    def with_linked_provider(
        self, provider: str, provider_data: dict[str, Any]
    ) -> "User":
        """Copy with `provider` added to the additional providers."""
        return self.evolve(
            additional_providers_data={
                **self.additional_providers_data,
                provider: dict(provider_data),
            }
        )

    def without_linked_provider(self, provider: str) -> "User":
        """Copy with `provider` removed from the additional providers."""
        return self.evolve(
            additional_providers_data={
                name: data
                for name, data in self.additional_providers_data.items()
                if name != provider
            }
        )

    def sanitized(self) -> dict[str, Any]:
        """Public representation without password material."""
        return self.model_dump(mode="json", exclude={"password_hash", "salt"})
