"""One-shot messages carried in the session to the next rendered page."""

from fastapi import Request

FLASH_SESSION_KEY = "_flash"

# Categories rendered by the layout template
MESSAGE = "message"
ERROR = "error"


def flash(request: Request, category: str, text: str) -> None:
    """Store a message to be shown on the next rendered page.

    A later message in the same category replaces the earlier one.
    """
    messages = dict(request.session.get(FLASH_SESSION_KEY, {}))
    messages[category] = text
    request.session[FLASH_SESSION_KEY] = messages


def pop_flash(request: Request, category: str) -> str | None:
    """Read a message and discard it so it is shown exactly once."""
    messages = dict(request.session.get(FLASH_SESSION_KEY, {}))
    text = messages.pop(category, None)
    if messages:
        request.session[FLASH_SESSION_KEY] = messages
    else:
        request.session.pop(FLASH_SESSION_KEY, None)
    return text

