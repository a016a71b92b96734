"""Program session and application ORM models."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from afterburner.database import Base


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ProgramSession(Base):
    """Time-boxed program cohort with an application window."""

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), default="")
    apply_start: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    apply_end: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    # Relationships
    applications: Mapped[list[Application]] = relationship(back_populates="session")

    def is_accepting_applications(self, at: datetime) -> bool:
        """Return True if ``at`` falls inside the closed application window."""
        at = _as_utc(at)
        return _as_utc(self.apply_start) <= at <= _as_utc(self.apply_end)


class Application(Base):
    """A user's application to a program session."""

    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(primary_key=True)
    github_login: Mapped[str] = mapped_column(String(39), index=True)
    repo: Mapped[str] = mapped_column(String(255))
    project_description: Mapped[str] = mapped_column(Text)
    session_id: Mapped[int] = mapped_column(ForeignKey("sessions.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # Relationships
    session: Mapped[ProgramSession] = relationship(back_populates="applications")
