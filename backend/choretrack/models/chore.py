"""Chore ORM — one row per recurring household chore.

Invariants:
    - id is UUID primary key; household_id indexed for snapshot queries
    - version starts at 1 and only changes through the guarded UPDATE in sql_store
    - completed_at / completed_by / previous_due_at are all set or all NULL
      (the single completion record)

Design Decisions:
    - Completion record flattened into three columns: complete and undo are a
      single-row UPDATE, so readers never see due_at and the record out of step
    - interval_type stored as its string value (IntervalType enum in core)
    - Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    - room_id is an opaque tag owned by the rooms feature; no foreign key here
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from choretrack.db.base import Base


class ChoreRow(Base):
    """Chore persistence row."""
    __tablename__ = "chores"
    __table_args__ = (
        Index("ix_chores_household_due", "household_id", "due_at"),
        Index("ix_chores_household_room", "household_id", "room_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    household_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), nullable=False,
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    interval_type: Mapped[str] = mapped_column(String(16), nullable=False)
    interval_value: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    due_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    assigned_to: Mapped[str | None] = mapped_column(String(128), nullable=True)
    room_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # Completion record (single-level undo)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    previous_due_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
