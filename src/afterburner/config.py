"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Afterburner"
    debug: bool = False
    secret_key: str  # Required, signs the session cookie

    # Database
    database_url: str = "sqlite+aiosqlite:///./afterburner.db"

    # Profile cache
    redis_url: str = "redis://localhost:6379/0"
    profile_cache_ttl_seconds: int = 60 * 60 * 3

    # GitHub OAuth application
    github_client_id: str = ""
    github_client_secret: str = ""
    github_oauth_callback: str = "http://localhost:8000/auth/callback"
    github_oauth_base_url: str = "https://github.com"
    github_api_base_url: str = "https://api.github.com"
    github_user_agent: str = "Afterburner/1.0"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.github_client_id or not self.github_client_secret:
            warnings.append(
                "GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET are not set - sign in will not work"
            )

        if self.github_oauth_callback.startswith("http://localhost"):
            warnings.append("GITHUB_OAUTH_CALLBACK points at localhost")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
