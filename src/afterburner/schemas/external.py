"""Pydantic schemas for GitHub API responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """Public profile of a GitHub account."""

    model_config = ConfigDict(extra="ignore")

    login: str = Field(description="GitHub login")
    id: int = Field(description="GitHub account ID")
    name: str | None = Field(default=None, description="Display name")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    html_url: str | None = Field(default=None, description="Profile page URL")
    bio: str | None = Field(default=None, description="Profile bio")
    company: str | None = Field(default=None, description="Company")
    blog: str | None = Field(default=None, description="Website")
    location: str | None = Field(default=None, description="Location")
    public_repos: int = Field(default=0, description="Number of public repositories")
    followers: int = Field(default=0, description="Follower count")
    following: int = Field(default=0, description="Following count")
    created_at: datetime | None = Field(default=None, description="Account creation time")


class GitHubRepository(BaseModel):
    """A repository visible to the signed-in user."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="GitHub repository ID")
    name: str = Field(description="Repository name")
    full_name: str = Field(description="owner/name")
    html_url: str | None = Field(default=None, description="Repository page URL")
    description: str | None = Field(default=None, description="Repository description")
    private: bool = Field(default=False, description="Whether the repository is private")
    fork: bool = Field(default=False, description="Whether the repository is a fork")


class GitHubAccessToken(BaseModel):
    """Response of the OAuth code exchange."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = Field(default=None, description="OAuth access token")
    token_type: str | None = Field(default=None, description="Token type")
    scope: str | None = Field(default=None, description="Granted scopes")
    error: str | None = Field(default=None, description="Error code when the exchange failed")
    error_description: str | None = Field(default=None, description="Error detail")
