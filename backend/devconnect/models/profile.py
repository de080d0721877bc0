"""Profile ORM: one-to-one developer profile with embedded history sequences.

Invariants:
    - user_id is unique: at most one Profile per User
    - experience/education are ordered lists of dicts, each with its own "id"
    - version increments on every UPDATE; a stale write raises StaleDataError

Design Decisions:
    - JSON columns for history: the whole aggregate is rewritten on each persist
    - version_id_col for optimistic concurrency: two concurrent read-modify-write
      cycles cannot silently overwrite each other
    - user relationship lazy="selectin": owner name/avatar joined into every read
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from devconnect.db.base import Base


class Profile(Base):
    """Profile aggregate: owned by exactly one User."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(200), nullable=False)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(100), nullable=True)
    social: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    __mapper_args__ = {"version_id_col": version}
