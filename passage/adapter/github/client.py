"""GitHub OAuth client implementation.

Implements the OAuth 2.0 web application flow for GitHub.
"""

from urllib.parse import urlencode

import httpx
import logfire

from passage.adapter.error import ProviderError
from passage.domain.service.auth_service import OAuthClient
from passage.domain.value import ProviderProfile

GITHUB_PROVIDER = "github"

# Abandoned authorizations never reach the callback; oldest states are evicted
MAX_PENDING_STATES = 1000


class GitHubOAuthError(ProviderError):
    """GitHub OAuth error."""

    pass


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth 2.0 client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        max_pending_states: int = MAX_PENDING_STATES,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth app client ID
            client_secret: GitHub OAuth app client secret
            redirect_uri: Callback URL registered with GitHub
            max_pending_states: Outstanding authorizations kept before the
                oldest is forgotten
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        # OAuth endpoints
        self.authorize_url = "https://github.com/login/oauth/authorize"
        self.token_url = "https://github.com/login/oauth/access_token"
        self.user_info_url = "https://api.github.com/user"
        self.user_emails_url = "https://api.github.com/user/emails"

        # States issued by initiate_authorization, oldest first (single-process
        # storage, bounded by max_pending_states)
        self.max_pending_states = max_pending_states
        self._pending_states: dict[str, None] = {}

    async def initiate_authorization(self, state: str) -> str:
        """Initiate GitHub OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._pending_states[state] = None
        while len(self._pending_states) > self.max_pending_states:
            del self._pending_states[next(iter(self._pending_states))]

        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "read:user user:email",
            "state": state,
        }

        auth_url = f"{self.authorize_url}?{urlencode(params)}"

        logfire.info(
            "GitHub OAuth authorization initiated",
            state=state,
            redirect_uri=self.redirect_uri,
        )

        return auth_url

    async def complete_authorization(self, code: str, state: str) -> ProviderProfile:
        """Complete GitHub OAuth authorization flow.

        Args:
            code: Authorization code from GitHub callback
            state: State parameter for verification

        Returns:
            Normalized GitHub profile

        Raises:
            GitHubOAuthError: If OAuth flow fails
        """
        if state not in self._pending_states:
            raise GitHubOAuthError("Invalid or expired state")
        del self._pending_states[state]

        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        email = user_info.get("email") or await self._get_primary_email(access_token)

        logfire.info(
            "GitHub OAuth completed",
            login=user_info.get("login"),
            github_id=user_info["id"],
        )

        provider_data = dict(user_info)
        provider_data["accessToken"] = access_token

        return ProviderProfile(
            provider=GITHUB_PROVIDER,
            provider_identifier_field="id",
            provider_data=provider_data,
            display_name=user_info.get("name"),
            email=email,
            username=user_info.get("login"),
        )

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback

        Returns:
            Access token

        Raises:
            GitHubOAuthError: If token exchange fails
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise GitHubOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"Token exchange failed: {response.status_code}")

        result = response.json()
        # GitHub reports OAuth errors with a 200 and an "error" field
        if "access_token" not in result:
            raise GitHubOAuthError(
                f"Token exchange failed: {result.get('error', 'no access token')}"
            )
        return result["access_token"]

    async def _api_get(self, url: str, access_token: str):
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/vnd.github+json",
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("GitHub API HTTP error", url=url, error=str(e))
            raise GitHubOAuthError(f"HTTP error calling GitHub API: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub API request failed",
                url=url,
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"GitHub API request failed: {response.status_code}")

        return response.json()

    async def _get_user_info(self, access_token: str) -> dict:
        """Get the authenticated user's profile."""
        return await self._api_get(self.user_info_url, access_token)

    async def _get_primary_email(self, access_token: str) -> str | None:
        """Get the primary verified email when the profile hides it."""
        emails = await self._api_get(self.user_emails_url, access_token)
        for entry in emails:
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    The authorization code becomes the GitHub user id, so tests control
    which identity signs in. The code "denied" simulates a refused
    authorization.
    """

    def __init__(self, provider: str = GITHUB_PROVIDER):
        """Initialize mock client without real OAuth configuration."""
        self.provider = provider

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://{self.provider}.example.com/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ProviderProfile:
        """Return a mock profile whose identifier is the code."""
        _ = state  # Unused in mock
        if code == "denied":
            raise GitHubOAuthError("Authorization denied")

        return ProviderProfile(
            provider=self.provider,
            provider_identifier_field="id",
            provider_data={"id": code, "login": f"mock-{code}"},
            display_name="Mock User",
            email=f"mock-{code}@example.com",
            username=f"mock-{code}",
        )
