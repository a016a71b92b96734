"""Medal and decoration ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afterburner.database import Base

if TYPE_CHECKING:
    from afterburner.models.user import User


class Medal(Base):
    """Awardable achievement worth a fixed number of points."""

    __tablename__ = "medals"
    __table_args__ = (CheckConstraint("points >= 0", name="ck_medal_points_unsigned"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    image: Mapped[str] = mapped_column(String(500))
    image_disabled: Mapped[str] = mapped_column(String(500))
    points: Mapped[int] = mapped_column(default=0)
    sort_key: Mapped[str] = mapped_column(String(50), index=True)
    description: Mapped[str] = mapped_column(Text)
    secret: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # Relationships
    decorations: Mapped[list[Decoration]] = relationship(back_populates="medal")


class Decoration(Base):
    """A single award of a medal to a user.

    A user may hold the same medal more than once; every row counts.
    """

    __tablename__ = "decorations"

    id: Mapped[int] = mapped_column(primary_key=True)
    medal_id: Mapped[int] = mapped_column(ForeignKey("medals.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # Relationships
    medal: Mapped[Medal] = relationship(back_populates="decorations")
    user: Mapped[User] = relationship(back_populates="decorations")
