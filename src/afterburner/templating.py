"""Jinja2 rendering and redirect helpers for the HTML routes."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from afterburner.models.user import User
from afterburner.utils.flash import pop_flash

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.globals["pop_flash"] = pop_flash


def render(
    request: Request,
    name: str,
    current_user: User | None = None,
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render a template with the signed-in user available as ``current_user``."""
    return templates.TemplateResponse(
        request,
        name,
        {"current_user": current_user, **context},
        status_code=status_code,
    )


def redirect(url: str) -> RedirectResponse:
    """Redirect with 303 so the browser follows up with a GET."""
    return RedirectResponse(url, status_code=303)
