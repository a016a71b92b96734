"""User ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afterburner.database import Base

if TYPE_CHECKING:
    from afterburner.models.medal import Decoration
    from afterburner.models.permission import Permission


class UserType(str, enum.Enum):
    """Participant role. Cadets and mentors are ranked separately."""

    CADET = "cadet"
    MENTOR = "mentor"


user_permissions = Table(
    "user_permissions",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """Program participant, keyed by GitHub login."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    github_login: Mapped[str] = mapped_column(String(39), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    t_shirt_size: Mapped[str | None] = mapped_column(String(10), nullable=True)
    type: Mapped[str] = mapped_column(String(20), default=UserType.CADET.value)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # Relationships
    permissions: Mapped[list[Permission]] = relationship(secondary=user_permissions)
    decorations: Mapped[list[Decoration]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def permission_slugs(self) -> set[str]:
        return {permission.slug for permission in self.permissions}

    def has_permission(self, slug: str) -> bool:
        """Return True if a permission with this slug was granted to the user."""
        return slug in self.permission_slugs

    @property
    def is_cadet(self) -> bool:
        return self.type == UserType.CADET.value
