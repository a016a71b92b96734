"""Tests for session application endpoints."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from afterburner.database import get_db
from afterburner.main import app
from afterburner.models.program import Application, ProgramSession
from afterburner.models.user import User
from afterburner.schemas.external import GitHubRepository
from afterburner.services.github import get_github_client
from afterburner.utils.security import get_current_user, get_github_login

APPLICATION = {"repo": "octocat/Hello-World", "project_description": "A tiny web game."}


def create_program_session(start: datetime, end: datetime) -> ProgramSession:
    return ProgramSession(id=1, slug="s1", name="Spring", apply_start=start, apply_end=end)


def session_result(program_session: ProgramSession | None) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = program_session
    return result


@pytest.fixture
def applicant() -> User:
    """Sign in a registered cadet."""
    user = User(id=1, github_login="octocat", name="Mona Lisa", email="mona@example.com", type="cadet")
    app.dependency_overrides[get_github_login] = lambda: user.github_login
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def mock_github_client() -> MagicMock:
    github = MagicMock()
    github.list_repositories = AsyncMock(return_value=[])
    github.close = AsyncMock()
    app.dependency_overrides[get_github_client] = lambda: github
    return github


@pytest.fixture
def db(mock_db_session: AsyncMock) -> AsyncMock:
    async def override_get_db():
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    return mock_db_session


class TestProgramSessionWindow:
    """Tests for the application window check."""

    def test_inside_window(self) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        assert program_session.is_accepting_applications(now)

    def test_bounds_are_inclusive(self) -> None:
        start = datetime(2026, 3, 1, tzinfo=UTC)
        end = datetime(2026, 3, 31, tzinfo=UTC)
        program_session = create_program_session(start, end)
        assert program_session.is_accepting_applications(start)
        assert program_session.is_accepting_applications(end)

    def test_after_window(self) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        assert not program_session.is_accepting_applications(now + timedelta(hours=2))

    def test_naive_datetimes_are_utc(self) -> None:
        """Values read back from SQLite have no timezone."""
        program_session = create_program_session(datetime(2026, 3, 1), datetime(2026, 3, 31))
        assert program_session.is_accepting_applications(datetime(2026, 3, 15, tzinfo=UTC))
        assert not program_session.is_accepting_applications(datetime(2026, 4, 1, tzinfo=UTC))


class TestApply:
    """Tests for submitting an application."""

    async def test_apply_inside_window(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,
        db: AsyncMock,
    ) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        db.execute = AsyncMock(return_value=session_result(program_session))

        response = await client.post("/apply/s1", data=APPLICATION)

        assert response.status_code == 303
        assert response.headers["location"] == "/apply/thanks"
        db.add.assert_called_once()
        application = db.add.call_args.args[0]
        assert isinstance(application, Application)
        assert application.session_id == 1
        assert application.github_login == "octocat"
        assert application.repo == "octocat/Hello-World"
        mock_github_client.close.assert_awaited_once()

    async def test_apply_closes_client_when_save_fails(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,
        db: AsyncMock,
    ) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        db.execute = AsyncMock(return_value=session_result(program_session))
        db.flush = AsyncMock(side_effect=RuntimeError("database is locked"))

        with pytest.raises(RuntimeError):
            await client.post("/apply/s1", data=APPLICATION)

        mock_github_client.close.assert_awaited_once()

    async def test_apply_after_window(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,  # noqa: ARG002
        db: AsyncMock,
    ) -> None:
        """A window that closed an hour ago rejects the application."""
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=3), now - timedelta(hours=1))
        db.execute = AsyncMock(return_value=session_result(program_session))

        response = await client.post("/apply/s1", data=APPLICATION)

        assert response.status_code == 200
        assert "not open" in response.text
        db.add.assert_not_called()

    async def test_apply_unknown_session(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,  # noqa: ARG002
        db: AsyncMock,
    ) -> None:
        db.execute = AsyncMock(return_value=session_result(None))

        response = await client.post("/apply/nope", data=APPLICATION)

        assert response.status_code == 200
        db.add.assert_not_called()

    async def test_apply_missing_description(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,  # noqa: ARG002
        db: AsyncMock,
    ) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        db.execute = AsyncMock(return_value=session_result(program_session))

        response = await client.post("/apply/s1", data={"repo": "octocat/Hello-World"})

        assert response.status_code == 200
        assert 'action="/apply/s1"' in response.text
        db.add.assert_not_called()

    async def test_apply_requires_registered_user(
        self, client: AsyncClient, db: AsyncMock
    ) -> None:
        """A signed-in identity that never signed up cannot apply."""
        app.dependency_overrides[get_github_login] = lambda: "octocat"
        app.dependency_overrides[get_current_user] = lambda: None

        response = await client.post("/apply/s1", data=APPLICATION)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        db.execute.assert_not_called()
        db.add.assert_not_called()

    async def test_application_form_lists_repositories(
        self,
        client: AsyncClient,
        applicant: User,  # noqa: ARG002
        mock_github_client: MagicMock,
        db: AsyncMock,
    ) -> None:
        now = datetime.now(UTC)
        program_session = create_program_session(now - timedelta(hours=1), now + timedelta(hours=1))
        db.execute = AsyncMock(return_value=session_result(program_session))
        mock_github_client.list_repositories = AsyncMock(
            return_value=[
                GitHubRepository(id=1, name="Hello-World", full_name="octocat/Hello-World")
            ]
        )

        with patch("afterburner.api.apply.get_github_token", return_value="gho_token"):
            response = await client.get("/apply/s1")

        assert response.status_code == 200
        assert "octocat/Hello-World" in response.text
        mock_github_client.list_repositories.assert_awaited_once_with("gho_token")
        mock_github_client.close.assert_awaited_once()
