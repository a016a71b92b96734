"""Redis-backed cache for GitHub public profiles."""

import logging
from functools import lru_cache

from redis.asyncio import Redis

from afterburner.config import get_settings
from afterburner.schemas.external import GitHubUser
from afterburner.services.github import GitHubClient

logger = logging.getLogger(__name__)


def github_profile_key(login: str) -> str:
    """Build the cache key of a login's GitHub profile."""
    return f"{login}:github"


class ProfileCache:
    """Stores GitHub profiles as JSON with a fixed expiry."""

    def __init__(self, redis: Redis, ttl_seconds: int) -> None:
        self._redis = redis
        self.ttl_seconds = ttl_seconds

    async def get(self, login: str) -> GitHubUser | None:
        raw = await self._redis.get(github_profile_key(login))
        if raw is None:
            return None
        return GitHubUser.model_validate_json(raw)

    async def set(self, login: str, profile: GitHubUser) -> None:
        await self._redis.set(
            github_profile_key(login),
            profile.model_dump_json(),
            ex=self.ttl_seconds,
        )


async def fetch_github_profile(login: str, cache: ProfileCache, github: GitHubClient) -> GitHubUser:
    """Return the GitHub profile for ``login``, reading through the cache.

    Cache and API errors are not handled here.
    """
    profile = await cache.get(login)
    if profile is None:
        logger.info("GitHub profile cache miss for %s", login)
        profile = await github.get_user(login)
        await cache.set(login, profile)
    return profile


@lru_cache
def get_redis() -> Redis:
    """Get the process-wide Redis client."""
    return Redis.from_url(get_settings().redis_url)


async def get_profile_cache() -> ProfileCache:
    """Factory function to create the profile cache.

    Can be used as a FastAPI dependency.
    """
    return ProfileCache(get_redis(), get_settings().profile_cache_ttl_seconds)
