"""Pydantic schemas for form and external API validation."""

from afterburner.schemas.external import GitHubAccessToken, GitHubRepository, GitHubUser
from afterburner.schemas.forms import (
    ApplicationForm,
    DecorateForm,
    FormModel,
    MedalForm,
    PermissionForm,
    SignupForm,
    UserForm,
)

__all__ = [
    # External API schemas
    "GitHubAccessToken",
    "GitHubRepository",
    "GitHubUser",
    # Form schemas
    "ApplicationForm",
    "DecorateForm",
    "FormModel",
    "MedalForm",
    "PermissionForm",
    "SignupForm",
    "UserForm",
]
