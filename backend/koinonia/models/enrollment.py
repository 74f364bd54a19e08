"""Enrollment ORM — one participant registered by a user for an event.

Invariants:
    - Always belongs to exactly one (user, event) pair
    - status transitions: enrolled -> cancelled (one way, rows are never deleted)
    - Among enrolled rows of one pair, (lower(trim(name)), age) is unique —
      enforced by services/enrollment_service.py inside the add transaction

Design Decisions:
    - participant_name may differ from the user's name (dependents, companions)
    - Composite index on (event_id, user_id, status): every read filters on all three
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from koinonia.core.domain_types import EnrollmentStatus
from koinonia.db.base import Base


class Enrollment(Base):
    """Participant record for one (user, event) pair."""
    __tablename__ = "enrollments"
    __table_args__ = (
        Index("ix_enrollments_event_user_status", "event_id", "user_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id"), nullable=False,
    )
    participant_name: Mapped[str] = mapped_column(String(200), nullable=False)
    participant_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EnrollmentStatus.ENROLLED.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
