"""Applications to program sessions."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from afterburner.database import get_db
from afterburner.models.program import Application, ProgramSession
from afterburner.models.user import User
from afterburner.schemas.external import GitHubRepository
from afterburner.schemas.forms import ApplicationForm
from afterburner.services.github import GitHubClient, get_github_client
from afterburner.templating import redirect, render
from afterburner.utils.forms import parse_form
from afterburner.utils.security import CurrentUser, RegisteredUser, get_github_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/apply", tags=["apply"])


async def render_application(
    request: Request,
    user: User,
    session_slug: str,
    program_session: ProgramSession | None,
    github_client: GitHubClient,
) -> HTMLResponse:
    """Render the application form with the applicant's GitHub repositories."""
    repositories: list[GitHubRepository] = []
    token = get_github_token(request)
    try:
        if token:
            repositories = await github_client.list_repositories(token)
    finally:
        await github_client.close()

    accepting = program_session is not None and program_session.is_accepting_applications(
        datetime.now(UTC)
    )
    return render(
        request,
        "current.html",
        user,
        session_slug=session_slug,
        program_session=program_session,
        accepting=accepting,
        repositories=repositories,
    )


async def find_program_session(db: AsyncSession, slug: str) -> ProgramSession | None:
    result = await db.execute(select(ProgramSession).where(ProgramSession.slug == slug))
    return result.scalar_one_or_none()


# Declared before /{session_slug} so "thanks" is not taken for a slug
@router.get("/thanks", response_class=HTMLResponse)
async def apply_thanks(request: Request, current_user: CurrentUser) -> HTMLResponse:
    return render(request, "apply_thanks.html", current_user)


@router.get("/{session_slug}", response_class=HTMLResponse)
async def application_form(
    request: Request,
    session_slug: str,
    user: RegisteredUser,
    db: AsyncSession = Depends(get_db),
    github_client: GitHubClient = Depends(get_github_client),
) -> HTMLResponse:
    """Show the application form for a session."""
    program_session = await find_program_session(db, session_slug)
    return await render_application(request, user, session_slug, program_session, github_client)


@router.post("/{session_slug}")
async def apply(
    request: Request,
    session_slug: str,
    user: RegisteredUser,
    db: AsyncSession = Depends(get_db),
    github_client: GitHubClient = Depends(get_github_client),
) -> Response:
    """Apply to a session while its application window is open.

    An unknown session or a closed window re-renders the form without
    reading the submission. Invalid input re-renders the form as well.
    """
    program_session = await find_program_session(db, session_slug)
    now = datetime.now(UTC)
    if program_session is None or not program_session.is_accepting_applications(now):
        return await render_application(request, user, session_slug, program_session, github_client)

    form = await parse_form(request, ApplicationForm)
    if form is None:
        return await render_application(request, user, session_slug, program_session, github_client)

    try:
        db.add(
            Application(
                github_login=user.github_login,
                repo=form.repo,
                project_description=form.project_description,
                session_id=program_session.id,
                created_at=now,
            )
        )
        await db.flush()
    finally:
        await github_client.close()
    logger.info("%s applied to session %s", user.github_login, session_slug)

    return redirect("/apply/thanks")
