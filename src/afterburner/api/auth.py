"""GitHub sign in, sign out and self-service signup."""

import logging
import secrets
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from afterburner.database import get_db
from afterburner.models.user import User, UserType
from afterburner.schemas.forms import SignupForm
from afterburner.services.github import (
    GitHubClient,
    GitHubOAuthClient,
    get_github_client,
    get_github_oauth_client,
)
from afterburner.templating import redirect, render
from afterburner.utils.forms import parse_form
from afterburner.utils.security import (
    SESSION_LOGIN_KEY,
    SESSION_TOKEN_KEY,
    CurrentUser,
    GitHubLogin,
    get_github_login,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

OAUTH_STATE_KEY = "oauth_state"
RETURN_TO_KEY = "return_to"


def _is_local_path(path: str) -> bool:
    return path.startswith("/") and not path.startswith("//")


@router.get("/auth/login")
async def login(
    request: Request,
    return_to: str = Query("/", alias="next"),
    oauth_client: GitHubOAuthClient = Depends(get_github_oauth_client),
) -> Response:
    """Start the GitHub OAuth flow, or go home if already signed in."""
    if get_github_login(request) is not None:
        return redirect("/")

    state = secrets.token_urlsafe(32)
    request.session[OAUTH_STATE_KEY] = state
    request.session[RETURN_TO_KEY] = return_to if _is_local_path(return_to) else "/"
    return redirect(oauth_client.authorize_url(state))


@router.get("/auth/callback")
async def callback(
    request: Request,
    code: str = Query(""),
    state: str = Query(""),
    oauth_client: GitHubOAuthClient = Depends(get_github_oauth_client),
    github_client: GitHubClient = Depends(get_github_client),
) -> Response:
    """Finish the OAuth flow and remember the identity in the session.

    A missing code or a state that does not match the one issued by
    ``/auth/login`` sends the browser home without signing in.
    """
    expected_state = request.session.pop(OAUTH_STATE_KEY, None)
    if (
        not code
        or expected_state is None
        or not secrets.compare_digest(state.encode(), expected_state.encode())
    ):
        logger.warning("Rejected OAuth callback with missing code or mismatched state")
        return redirect("/")

    try:
        token = await oauth_client.exchange_code(code)
        github_user = await github_client.get_authenticated_user(token)
    finally:
        await oauth_client.close()
        await github_client.close()

    request.session[SESSION_LOGIN_KEY] = github_user.login
    request.session[SESSION_TOKEN_KEY] = token
    logger.info("Signed in %s", github_user.login)

    return redirect(request.session.pop(RETURN_TO_KEY, "/"))


@router.get("/auth/logout")
async def logout(request: Request) -> Response:
    """Forget the identity and any pending messages."""
    request.session.clear()
    return redirect("/")


@router.get("/signup", response_class=HTMLResponse)
async def signup_form(
    request: Request,
    github_login: GitHubLogin,
    current_user: CurrentUser,
) -> HTMLResponse:
    """Render the signup form for a signed-in identity."""
    return render(request, "signup.html", current_user, github_login=github_login)


@router.post("/signup")
async def signup(
    request: Request,
    github_login: GitHubLogin,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Create a cadet for the signed-in identity.

    An identity that already signed up is sent to its profile instead.
    """
    existing = await db.execute(select(User).where(User.github_login == github_login))
    if existing.scalar_one_or_none() is not None:
        return redirect(f"/profile/{github_login}")

    form = await parse_form(request, SignupForm)
    if form is None:
        return render(
            request,
            "signup.html",
            github_login=github_login,
            form_failed=True,
            status_code=422,
        )

    user = User(
        github_login=github_login,
        name=form.name,
        email=form.email,
        t_shirt_size=form.t_shirt_size,
        type=UserType.CADET.value,
        created_at=datetime.now(UTC),
    )
    db.add(user)
    await db.flush()
    logger.info("New cadet signed up: %s", github_login)

    return redirect(f"/profile/{github_login}")
