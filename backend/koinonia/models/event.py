"""Event ORM — a happening users can enroll participants into.

Invariants:
    - price_cents >= 0 (CHECK constraint)
    - is_free implies price_cents == 0 (CHECK constraint)
    - event_date is timezone-aware; DD/MM/YYYY input is stored as UTC midnight
    - created_by_id is optional (events may be seeded without a creator)

Design Decisions:
    - Price in integer centavos: no float rounding in storage
    - subscribers count is NOT a column: computed at read time from enrollments
"""

from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from koinonia.db.base import Base


class Event(Base):
    """Event entity."""
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_events_price_non_negative"),
        CheckConstraint(
            "NOT is_free OR price_cents = 0", name="ck_events_free_has_no_price",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    attractions: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(300), nullable=False)
    event_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
