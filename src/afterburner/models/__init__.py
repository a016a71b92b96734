"""SQLAlchemy ORM models."""

from afterburner.models.medal import Decoration, Medal
from afterburner.models.permission import Permission
from afterburner.models.program import Application, ProgramSession
from afterburner.models.user import User, UserType, user_permissions

__all__ = [
    "Application",
    "Decoration",
    "Medal",
    "Permission",
    "ProgramSession",
    "User",
    "UserType",
    "user_permissions",
]
