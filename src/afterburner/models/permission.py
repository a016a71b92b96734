"""Permission ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from afterburner.database import Base


class Permission(Base):
    """Named admin capability, referenced by slug."""

    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
