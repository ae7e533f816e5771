"""Mock providers for testing."""

from .github import MockGitHubProvider
from .persistence import MockPersistenceProvider
from .session import FixedJWTProvider, SwitchableJWTService
from .container import build_test_container

__all__ = [
    "MockGitHubProvider",
    "MockPersistenceProvider",
    "FixedJWTProvider",
    "SwitchableJWTService",
    "build_test_container",
]
