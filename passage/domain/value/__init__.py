"""Domain value objects for Passage."""

from passage.domain.value.identifiers import UserId
from passage.domain.value.types import (
    LOCAL_PROVIDER,
    ProviderIdentityQuery,
    ProviderProfile,
    validate_provider_name,
)

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "LOCAL_PROVIDER",
    "ProviderIdentityQuery",
    "ProviderProfile",
    "validate_provider_name",
]
