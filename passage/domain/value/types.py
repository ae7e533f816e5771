"""Domain value objects for Passage.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from typing import Any

from pydantic import Field, field_validator, model_validator

from passage.domain.value.common import ValueObject

# Provider name used for accounts created through local signup
LOCAL_PROVIDER = "local"

_PROVIDER_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,49}$")


def json_equal(left: Any, right: Any) -> bool:
    """Equality as JSONB sees it.

    Numbers compare by value (42 equals 42.0), but booleans, numbers and
    strings never equal each other (true is not 1, "42" is not 42).
    """
    numeric = (int, float)
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, numeric) and isinstance(right, numeric):
        return left == right
    return type(left) is type(right) and left == right


def validate_provider_name(name: str) -> str:
    """Validate a provider name (lowercase, alphanumeric, '-' or '_')."""
    if not _PROVIDER_NAME_PATTERN.match(name):
        raise ValueError(
            "Provider name must be 1-50 characters, lowercase alphanumeric, "
            "'-' or '_'"
        )
    return name


class ProviderProfile(ValueObject):
    """Normalized user profile returned by an OAuth provider.

    Built by the OAuth adapters for every callback and never persisted.
    `provider_identifier_field` names the key of `provider_data` that holds
    the provider's permanent identifier for the user (e.g. "id" on GitHub).
    """

    provider: str
    provider_identifier_field: str
    provider_data: dict[str, Any] = Field(default_factory=dict)
    display_name: str | None = None
    email: str | None = None
    username: str | None = None  # Username hint from the provider

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate provider name format."""
        return validate_provider_name(v)

    @model_validator(mode="after")
    def validate_identifier_present(self) -> "ProviderProfile":
        """Ensure the identifier field is part of the provider data."""
        if self.provider_identifier_field not in self.provider_data:
            raise ValueError(
                f"Provider data is missing identifier field "
                f"'{self.provider_identifier_field}'"
            )
        return self

    @property
    def identifier(self) -> Any:
        """Provider-assigned identifier value."""
        return self.provider_data[self.provider_identifier_field]

    def candidate_username(self) -> str:
        """Username to start the unique-username search from.

        Uses the provider's username hint, falling back to the local part of
        the email address, falling back to an empty string.
        """
        if self.username:
            return self.username
        if self.email:
            return self.email.split("@")[0]
        return ""


class ProviderIdentityQuery(ValueObject):
    """Lookup for the user owning a provider identity.

    Matches a user whose primary provider is `provider` and whose primary
    provider data has `identifier_field == identifier`, OR whose additional
    provider data for `provider` has that same field and value.
    """

    provider: str
    identifier_field: str
    identifier: Any

    @classmethod
    def for_profile(cls, profile: ProviderProfile) -> "ProviderIdentityQuery":
        """Build the query for a provider profile."""
        return cls(
            provider=profile.provider,
            identifier_field=profile.provider_identifier_field,
            identifier=profile.identifier,
        )

    def matches_primary(
        self, provider: str, provider_data: dict[str, Any] | None
    ) -> bool:
        """Check the primary provider branch of the query."""
        if provider != self.provider or not provider_data:
            return False
        return (
            self.identifier_field in provider_data
            and json_equal(provider_data[self.identifier_field], self.identifier)
        )

    def matches_additional(
        self, additional_providers_data: dict[str, dict[str, Any]] | None
    ) -> bool:
        """Check the additional providers branch of the query."""
        data = (additional_providers_data or {}).get(self.provider)
        if not data:
            return False
        return (
            self.identifier_field in data
            and json_equal(data[self.identifier_field], self.identifier)
        )
