"""GitHub REST API and OAuth clients."""

import base64
from urllib.parse import urlencode

from afterburner.config import get_settings
from afterburner.schemas.external import GitHubAccessToken, GitHubRepository, GitHubUser
from afterburner.services.base import APIError, BaseAPIClient


class GitHubClient(BaseAPIClient):
    """Client for the GitHub REST API.

    Public profile lookups are made with the OAuth application's
    credentials; calls on behalf of a signed-in user pass that user's
    access token per request.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            client_id: OAuth application client ID. If not provided, uses settings.
            client_secret: OAuth application secret. If not provided, uses settings.
            base_url: GitHub API base URL. If not provided, uses settings.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self._client_id = client_id or settings.github_client_id
        self._client_secret = client_secret or settings.github_client_secret
        self._user_agent = settings.github_user_agent
        base = base_url or settings.github_api_base_url

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including User-Agent (required by GitHub)."""
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/vnd.github+json",
        }

    @staticmethod
    def _token_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def _app_headers(self) -> dict[str, str] | None:
        # Application credentials raise the anonymous rate limit.
        if self._client_id and self._client_secret:
            credentials = f"{self._client_id}:{self._client_secret}".encode()
            return {"Authorization": f"Basic {base64.b64encode(credentials).decode()}"}
        return None

    async def get_user(self, login: str) -> GitHubUser:
        """Get the public profile of a GitHub account.

        Raises:
            NotFoundError: If no account has this login.
        """
        data = await self.get(f"/users/{login}", headers=self._app_headers())
        return GitHubUser.model_validate(data)

    async def get_authenticated_user(self, token: str) -> GitHubUser:
        """Get the profile of the account that owns ``token``."""
        data = await self.get("/user", headers=self._token_headers(token))
        return GitHubUser.model_validate(data)

    async def list_repositories(self, token: str, per_page: int = 100) -> list[GitHubRepository]:
        """List repositories the token's owner can access, most recently pushed first."""
        data = await self.get(
            "/user/repos",
            params={"per_page": min(per_page, 100), "sort": "pushed"},
            headers=self._token_headers(token),
        )
        return [GitHubRepository.model_validate(repo) for repo in data]


class GitHubOAuthClient(BaseAPIClient):
    """Client for GitHub's OAuth web application flow."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        callback_url: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        settings = get_settings()
        self._client_id = client_id or settings.github_client_id
        self._client_secret = client_secret or settings.github_client_secret
        self._callback_url = callback_url or settings.github_oauth_callback
        self._user_agent = settings.github_user_agent
        base = base_url or settings.github_oauth_base_url

        if not self._client_id or not self._client_secret:
            raise ValueError("GitHub OAuth client ID and secret are required")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Ask GitHub for JSON instead of a form-encoded token response."""
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/json",
        }

    def authorize_url(self, state: str, scope: str = "user:email") -> str:
        """Build the URL the browser is sent to for sign in."""
        query = urlencode(
            {
                "client_id": self._client_id,
                "redirect_uri": self._callback_url,
                "scope": scope,
                "state": state,
            }
        )
        return f"{self.base_url}/login/oauth/authorize?{query}"

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        Raises:
            APIError: If GitHub rejects the code.
        """
        data = await self.post(
            "/login/oauth/access_token",
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "code": code,
                "redirect_uri": self._callback_url,
            },
        )
        token = GitHubAccessToken.model_validate(data)
        if token.error or not token.access_token:
            raise APIError(f"OAuth code exchange failed: {token.error_description or token.error}")
        return token.access_token


async def get_github_client() -> GitHubClient:
    """Factory function to create a GitHub API client.

    Can be used as a FastAPI dependency.
    """
    return GitHubClient()


async def get_github_oauth_client() -> GitHubOAuthClient:
    """Factory function to create a GitHub OAuth client.

    Can be used as a FastAPI dependency.
    """
    return GitHubOAuthClient()
