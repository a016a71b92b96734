"""Identity resolution and permission checks for request handlers."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from afterburner.database import get_db
from afterburner.models.user import User

# Session keys written by the OAuth callback
SESSION_LOGIN_KEY = "github_login"
SESSION_TOKEN_KEY = "github_token"


class AuthorizationError(Exception):
    """Base exception for requests that may not reach their handler."""


class LoginRequired(AuthorizationError):
    """Raised when there is no signed-in (or no registered) identity."""


class PermissionDenied(AuthorizationError):
    """Raised when the signed-in user lacks a required permission."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Missing permission: {slug}")
        self.slug = slug


def get_github_login(request: Request) -> str | None:
    """Return the GitHub login of the signed-in identity, if any."""
    return request.session.get(SESSION_LOGIN_KEY)


def get_github_token(request: Request) -> str | None:
    """Return the OAuth access token of the signed-in identity, if any."""
    return request.session.get(SESSION_TOKEN_KEY)


async def get_current_user(
    login: Annotated[str | None, Depends(get_github_login)],
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Load the registered user for the signed-in identity.

    Returns None when nobody is signed in or the identity has not signed up.
    """
    if login is None:
        return None

    result = await db.execute(
        select(User).where(User.github_login == login).options(selectinload(User.permissions))
    )
    return result.scalar_one_or_none()


def require_login(login: Annotated[str | None, Depends(get_github_login)]) -> str:
    """Require a signed-in identity; a User record is not needed."""
    if login is None:
        raise LoginRequired()
    return login


def require_user(
    login: Annotated[str, Depends(require_login)],  # noqa: ARG001 - Enforces sign in first
    user: Annotated[User | None, Depends(get_current_user)],
) -> User:
    """Require a signed-in identity that has a User record.

    An identity that is known to GitHub but has not signed up is treated
    as not signed in.
    """
    if user is None:
        raise LoginRequired()
    return user


def require_permissions(*slugs: str) -> Callable[..., Awaitable[User]]:
    """Build a dependency that requires every permission in ``slugs``.

    Example:
        @router.get("/admin/users")
        async def admin_users(user: User = Depends(require_permissions("users_view"))):
            ...
    """

    async def check_permissions(user: Annotated[User, Depends(require_user)]) -> User:
        for slug in slugs:
            if not user.has_permission(slug):
                raise PermissionDenied(slug)
        return user

    return check_permissions


# Type aliases for use in route dependencies
CurrentUser = Annotated[User | None, Depends(get_current_user)]
RegisteredUser = Annotated[User, Depends(require_user)]
GitHubLogin = Annotated[str, Depends(require_login)]
