"""Public pages: home, profiles, leaderboard and static content."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from afterburner.database import get_db
from afterburner.models.medal import Decoration, Medal
from afterburner.models.user import User
from afterburner.services.cache import ProfileCache, fetch_github_profile, get_profile_cache
from afterburner.services.github import GitHubClient, get_github_client
from afterburner.services.leaderboard import load_leaderboard
from afterburner.templating import redirect, render
from afterburner.utils.security import CurrentUser

router = APIRouter(tags=["site"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, current_user: CurrentUser) -> HTMLResponse:
    """Render the landing page."""
    return render(request, "index.html", current_user)


@router.get("/tips", response_class=HTMLResponse)
async def tips(request: Request, current_user: CurrentUser) -> HTMLResponse:
    return render(request, "tips.html", current_user)


@router.get("/contribute", response_class=HTMLResponse)
async def contribute(request: Request, current_user: CurrentUser) -> HTMLResponse:
    return render(request, "contribute.html", current_user)


@router.get("/profile/{github_login}", response_class=HTMLResponse)
async def profile(
    request: Request,
    github_login: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    cache: ProfileCache = Depends(get_profile_cache),
    github_client: GitHubClient = Depends(get_github_client),
) -> Response:
    """Show a participant's medals, points and GitHub profile.

    Unknown logins redirect to the home page. The GitHub profile is read
    through the profile cache.
    """
    result = await db.execute(
        select(User)
        .where(User.github_login == github_login)
        .options(selectinload(User.decorations).selectinload(Decoration.medal))
    )
    profile_user = result.scalar_one_or_none()
    if profile_user is None:
        return redirect("/")

    try:
        github_profile = await fetch_github_profile(profile_user.github_login, cache, github_client)
    finally:
        await github_client.close()

    medals_result = await db.execute(select(Medal).order_by(Medal.sort_key))
    medals = medals_result.scalars().all()

    # Medal ID -> number of times awarded
    earned: dict[int, int] = {}
    for decoration in profile_user.decorations:
        earned[decoration.medal_id] = earned.get(decoration.medal_id, 0) + 1

    return render(
        request,
        "profile.html",
        current_user,
        profile_user=profile_user,
        github_profile=github_profile,
        points=sum(d.medal.points for d in profile_user.decorations),
        medals=[m for m in medals if m.id in earned or not m.secret],
        earned=earned,
    )


@router.get("/leaderboard", response_class=HTMLResponse)
async def leaderboard(
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Rank cadets and mentors by medal points; recomputed on every request."""
    board = await load_leaderboard(db)
    return render(
        request,
        "leaderboard.html",
        current_user,
        cadet_leaders=board.cadets,
        mentor_leaders=board.mentors,
    )
