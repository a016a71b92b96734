"""Awarding medals to users."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from afterburner.database import get_db
from afterburner.models.medal import Decoration, Medal
from afterburner.models.user import User
from afterburner.schemas.forms import DecorateForm
from afterburner.templating import redirect, render
from afterburner.utils.flash import ERROR, MESSAGE, flash
from afterburner.utils.forms import parse_form
from afterburner.utils.security import require_permissions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medals", tags=["medals"])


@router.get("/decorate", response_class=HTMLResponse)
async def decorate_form(
    request: Request,
    current_user: User = Depends(require_permissions("medals_decorate")),
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """List users and medals for the award form."""
    users_result = await db.execute(select(User).order_by(User.name))
    medals_result = await db.execute(select(Medal).order_by(Medal.sort_key))

    return render(
        request,
        "decorate.html",
        current_user,
        users=users_result.scalars().all(),
        medals=medals_result.scalars().all(),
    )


@router.post("/decorate")
async def decorate(
    request: Request,
    current_user: User = Depends(require_permissions("medals_decorate")),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Award a medal to a user. The same medal may be awarded repeatedly."""
    form = await parse_form(request, DecorateForm)

    user = None
    medal = None
    if form is not None:
        user_result = await db.execute(select(User).where(User.github_login == form.github_login))
        user = user_result.scalar_one_or_none()
        medal_result = await db.execute(select(Medal).where(Medal.id == form.medal_id))
        medal = medal_result.scalar_one_or_none()

    if user is None or medal is None:
        flash(request, ERROR, "Something went wrong.")
        return redirect("/medals/decorate")

    db.add(Decoration(medal_id=medal.id, user_id=user.id, created_at=datetime.now(UTC)))
    await db.flush()
    logger.info("%s awarded %r to %s", current_user.github_login, medal.name, user.github_login)

    flash(request, MESSAGE, f'"{medal.name}" awarded to {user.name}.')
    return redirect("/medals/decorate")
