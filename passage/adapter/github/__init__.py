"""GitHub OAuth adapter."""

from .client import (
    GITHUB_PROVIDER,
    GitHubOAuthClient,
    GitHubOAuthError,
    MockGitHubOAuthClient,
    RealGitHubOAuthClient,
)

__all__ = [
    "GITHUB_PROVIDER",
    "GitHubOAuthClient",
    "GitHubOAuthError",
    "MockGitHubOAuthClient",
    "RealGitHubOAuthClient",
]
