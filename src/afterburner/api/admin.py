"""Administration of permissions, medals and users.

Every route is gated by a permission slug. Entities can be created and
listed; there are no update or delete routes.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from afterburner.database import get_db
from afterburner.models.medal import Medal
from afterburner.models.permission import Permission
from afterburner.models.user import User
from afterburner.schemas.forms import MedalForm, PermissionForm, UserForm
from afterburner.templating import redirect, render
from afterburner.utils.flash import ERROR, MESSAGE, flash
from afterburner.utils.forms import parse_form
from afterburner.utils.security import require_permissions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

FORM_ERROR = "Something went wrong. Check the form and try again."


@router.post("/permissions")
async def create_permission(
    request: Request,
    current_user: User = Depends(require_permissions("permissions_create")),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Create a permission. Slugs are unique."""
    form = await parse_form(request, PermissionForm)
    if form is None:
        flash(request, ERROR, FORM_ERROR)
        return redirect("/admin/users")

    existing = await db.execute(select(Permission).where(Permission.slug == form.slug))
    if existing.scalar_one_or_none() is not None:
        flash(request, ERROR, f'Permission "{form.slug}" already exists.')
        return redirect("/admin/users")

    db.add(Permission(slug=form.slug, name=form.name))
    await db.flush()
    logger.info("%s created permission %s", current_user.github_login, form.slug)

    flash(request, MESSAGE, f'Permission "{form.slug}" successfully created.')
    return redirect("/admin/users")


@router.get("/medals", response_class=HTMLResponse)
async def list_medals(
    request: Request,
    current_user: User = Depends(require_permissions("medals_view")),
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """List every medal, secret ones included, ordered by sort key."""
    result = await db.execute(select(Medal).order_by(Medal.sort_key))
    return render(request, "admin_medals.html", current_user, medals=result.scalars().all())


@router.post("/medal")
async def create_medal(
    request: Request,
    current_user: User = Depends(require_permissions("medals_create")),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Create a medal. Points must be an unsigned integer."""
    form = await parse_form(request, MedalForm)
    if form is None:
        flash(request, ERROR, FORM_ERROR)
        return redirect("/admin/medals")

    medal = Medal(
        name=form.name,
        image=form.image,
        image_disabled=form.image_disabled,
        points=form.points,
        sort_key=form.sort_key,
        description=form.description,
        secret=form.secret,
        created_at=datetime.now(UTC),
    )
    db.add(medal)
    await db.flush()
    logger.info("%s created medal %r (%d points)", current_user.github_login, medal.name, medal.points)

    flash(request, MESSAGE, f'Medal "{medal.name}" successfully created.')
    return redirect("/admin/medals")


@router.get("/users", response_class=HTMLResponse)
async def list_users(
    request: Request,
    current_user: User = Depends(require_permissions("users_view")),
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """List users with their permissions, and every known permission."""
    users_result = await db.execute(
        select(User).options(selectinload(User.permissions)).order_by(User.github_login)
    )
    permissions_result = await db.execute(select(Permission).order_by(Permission.slug))

    return render(
        request,
        "admin_users.html",
        current_user,
        users=users_result.scalars().all(),
        permissions=permissions_result.scalars().all(),
    )


@router.post("/user")
async def create_user(
    request: Request,
    current_user: User = Depends(require_permissions("users_create")),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Create a user with an explicit role and permissions.

    Permission slugs that do not exist are ignored.
    """
    form = await parse_form(request, UserForm, multi_valued=("permissions",))
    if form is None:
        flash(request, ERROR, FORM_ERROR)
        return redirect("/admin/users")

    existing = await db.execute(select(User).where(User.github_login == form.github_login))
    if existing.scalar_one_or_none() is not None:
        flash(request, ERROR, f"User {form.github_login} already exists.")
        return redirect("/admin/users")

    permissions: list[Permission] = []
    if form.permissions:
        permissions_result = await db.execute(
            select(Permission).where(Permission.slug.in_(form.permissions))
        )
        permissions = list(permissions_result.scalars().all())

    user = User(
        github_login=form.github_login,
        name=form.name,
        email=form.email,
        t_shirt_size=form.t_shirt_size,
        type=form.type.value,
        permissions=permissions,
        created_at=datetime.now(UTC),
    )
    db.add(user)
    await db.flush()
    logger.info(
        "%s created %s %s with permissions %s",
        current_user.github_login,
        user.type,
        user.github_login,
        sorted(user.permission_slugs),
    )

    flash(request, MESSAGE, f"User {user.github_login}/{user.name} successfully created.")
    return redirect("/admin/users")
