"""Provider base classes shared by all Passage DI providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components that tests can swap for in-memory fakes
Component = Literal["github", "persistence"]


class ProviderBase(Provider):
    """Dishka provider carrying component metadata.

    A provider listed in `PROVIDERS` with subclasses is a component: its
    subclasses are alternative implementations told apart by `__is_mock__`.
    A provider without subclasses is used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
