"""Business logic and external API clients."""

from afterburner.services.base import (
    APIError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
)
from afterburner.services.cache import ProfileCache, fetch_github_profile, get_profile_cache
from afterburner.services.github import (
    GitHubClient,
    GitHubOAuthClient,
    get_github_client,
    get_github_oauth_client,
)
from afterburner.services.leaderboard import Leaderboard, LeaderboardEntry, build_leaderboard

__all__ = [
    "APIError",
    "BaseAPIClient",
    "NotFoundError",
    "RateLimitError",
    "GitHubClient",
    "GitHubOAuthClient",
    "get_github_client",
    "get_github_oauth_client",
    "ProfileCache",
    "fetch_github_profile",
    "get_profile_cache",
    "Leaderboard",
    "LeaderboardEntry",
    "build_leaderboard",
]
