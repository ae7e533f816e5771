"""Dependency injection module."""

from typing import Type

from passage.util.di.application import ProdApplicationProvider
from passage.util.di.base import Component, ProviderBase
from passage.util.di.core import ProdConfigProvider
from passage.util.di.domain import ProdDomainProvider
from passage.util.di.infrastructure import (
    GitHubProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdGitHubProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    GitHubProvider,  # mockable
    PersistenceProvider,  # mockable
    OAuthAggregatorProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components with swappable implementations."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider listed in PROVIDERS.

    Args:
        base: Provider from PROVIDERS
        use_mock: Whether the mock implementation of a component is wanted

    Returns:
        Provider class (not instantiated); `base` itself when it has no
        alternative implementations

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    candidates = [impl for impl in implementations if impl.__is_mock__ == use_mock]
    if not candidates:
        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
        )
    return candidates[0]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "GitHubProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGitHubProvider",
    "ProdPersistenceProvider",
]
