"""OAuth client registry provider."""

from dishka import Scope, provide

from passage.adapter.github import GITHUB_PROVIDER, GitHubOAuthClient
from passage.domain.service.auth_service import OAuthClient
from passage.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Collects the configured OAuth clients under their provider names.

    AuthService dispatches `/auth/{provider}` requests through this mapping,
    so registering a new provider means adding its client here.
    """

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, github_oauth_client: GitHubOAuthClient
    ) -> dict[str, OAuthClient]:
        return {GITHUB_PROVIDER: github_oauth_client}
