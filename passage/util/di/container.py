"""Dependency injection container."""

from collections.abc import Collection, Sequence

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from passage.util.di import PROVIDERS, Component, get_provider


def build_container(
    mocked: Collection[Component] = (),
    overrides: Sequence[Provider] = (),
) -> AsyncContainer:
    """Build a container, using mock implementations for `mocked` components.

    Args:
        mocked: Components to replace with their mock implementation
        overrides: Providers registered last, replacing earlier bindings

    Returns:
        Async container including the FastAPI request provider
    """
    providers = [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, FastapiProvider(), *overrides)


def create_container() -> AsyncContainer:
    """Build the production container; settings come from the environment."""
    return build_container()


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the FastAPI app."""
    setup_dishka(container, app)
