"""Tests for identity resolution and permission checks."""

from unittest.mock import AsyncMock

import pytest

from afterburner.models.permission import Permission
from afterburner.models.user import User
from afterburner.utils.security import (
    LoginRequired,
    PermissionDenied,
    get_current_user,
    require_login,
    require_permissions,
    require_user,
)


def create_user(*slugs: str, login: str = "octocat") -> User:
    """Create a user holding the given permission slugs."""
    return User(
        id=1,
        github_login=login,
        name="Mona Lisa",
        email="mona@example.com",
        type="cadet",
        permissions=[Permission(slug=slug, name=slug) for slug in slugs],
    )


class TestUserPermissions:
    """Tests for permission lookups on the user."""

    def test_has_permission(self) -> None:
        user = create_user("medals_view", "medals_create")
        assert user.has_permission("medals_view")
        assert user.has_permission("medals_create")
        assert not user.has_permission("users_view")

    def test_no_permissions(self) -> None:
        user = create_user()
        assert user.permission_slugs == set()
        assert not user.has_permission("medals_view")


class TestRequireLogin:
    """Tests for the signed-in identity check."""

    def test_returns_login(self) -> None:
        assert require_login("octocat") == "octocat"

    def test_no_identity_raises(self) -> None:
        with pytest.raises(LoginRequired):
            require_login(None)


class TestRequireUser:
    """Tests for the registered user check."""

    def test_returns_user(self) -> None:
        user = create_user()
        assert require_user("octocat", user) is user

    def test_unregistered_identity_raises(self) -> None:
        """An identity without a User record is treated as not signed in."""
        with pytest.raises(LoginRequired):
            require_user("octocat", None)


class TestRequirePermissions:
    """Tests for the permission gate."""

    async def test_all_permissions_present(self) -> None:
        user = create_user("medals_view", "medals_create")
        check = require_permissions("medals_view", "medals_create")
        assert await check(user) is user

    async def test_missing_permission_raises(self) -> None:
        user = create_user("medals_view")
        check = require_permissions("medals_view", "medals_create")
        with pytest.raises(PermissionDenied) as exc_info:
            await check(user)
        assert exc_info.value.slug == "medals_create"

    async def test_no_required_permissions(self) -> None:
        """Without slugs the gate only requires a registered user."""
        user = create_user()
        assert await require_permissions()(user) is user


class TestGetCurrentUser:
    """Tests for loading the signed-in user."""

    async def test_no_identity_skips_query(self, mock_db_session: AsyncMock) -> None:
        assert await get_current_user(None, mock_db_session) is None
        mock_db_session.execute.assert_not_called()
