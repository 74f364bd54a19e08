"""Enrollment Service — transactional shell around the enrollment reconciler.

Invariants:
    - add_participants is purely additive: existing rows are never updated or removed
    - Existence checks, the dedup read and the batch insert share ONE transaction
    - Any failure rolls the whole transaction back; no partial participant list persists
    - cancel_enrollment flips enrolled -> cancelled for every active row of the pair;
      rows are never deleted
    - Cancelled rows never block re-enrollment (dedup reads active rows only)

Design Decisions:
    - Pure selection lives in core/enrollment_reconciler.py; this module only does IO
    - Destructive "delete then re-insert" enrollment is deliberately not offered
      (ADR: it destroys the audit trail of cancelled/previous participants)
"""

import logging

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.domain_types import EnrollmentStatus, EventId, UserId
from koinonia.core.enrollment_reconciler import (
    build_key_set, select_new_participants,
)
from koinonia.core.errors import ErrorContext, ResourceNotFoundError
from koinonia.core.event_projection import project_event
from koinonia.models.enrollment import Enrollment
from koinonia.models.event import Event
from koinonia.models.user import User
from koinonia.schemas.enrollment import EnrollmentCreate
from koinonia.services.event_service import subscribers_count_column
from koinonia.services.transactions import atomic

logger = logging.getLogger(__name__)

ENROLLED = EnrollmentStatus.ENROLLED.value
CANCELLED = EnrollmentStatus.CANCELLED.value


def _active_rows(event_id: EventId, user_id: UserId):
    return and_(
        Enrollment.event_id == event_id,
        Enrollment.user_id == user_id,
        Enrollment.status == ENROLLED,
    )


class EnrollmentService:
    """Participant enrollment for (user, event) pairs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_participants(
        self, event_id: EventId, request: EnrollmentCreate,
    ) -> list[Enrollment]:
        """Insert the requested participants that are not already active.

        Returns the created rows; an empty list means nothing new was added.
        Raises ResourceNotFoundError when the event or user does not exist.
        """
        user_id = request.user_id
        ctx = ErrorContext(event_id=event_id, user_id=user_id)

        async with atomic(self.db, "add participants", context=ctx):
            if await self.db.get(Event, event_id) is None:
                raise ResourceNotFoundError("Event", event_id, ctx)
            if await self.db.get(User, user_id) is None:
                raise ResourceNotFoundError("User", user_id, ctx)

            existing = await self.db.execute(
                select(Enrollment.participant_name, Enrollment.participant_age)
                .where(_active_rows(event_id, user_id)),
            )
            keys = build_key_set(existing.tuples().all())
            accepted = select_new_participants(keys, request.participants)

            created = [
                Enrollment(
                    user_id=user_id,
                    event_id=event_id,
                    participant_name=p.name,
                    participant_age=p.age,
                    status=ENROLLED,
                )
                for p in accepted
            ]
            if created:
                self.db.add_all(created)
                await self.db.flush()

        logger.info(
            f"Enrollment request: {len(created)} of "
            f"{len(request.participants)} participant(s) added",
            extra={
                "event_id": event_id, "user_id": user_id,
                "participants_added": len(created),
            },
        )
        return created

    async def list_participants(
        self, event_id: EventId, user_id: UserId,
    ) -> list[Enrollment]:
        """Active participants of the pair, oldest first."""
        result = await self.db.execute(
            select(Enrollment)
            .where(_active_rows(event_id, user_id))
            .order_by(Enrollment.id.asc()),
        )
        rows = list(result.scalars().all())
        if not rows:
            raise ResourceNotFoundError(
                "Enrollment", f"event={event_id} user={user_id}",
                ErrorContext(event_id=event_id, user_id=user_id),
            )
        return rows

    async def cancel_enrollment(self, event_id: EventId, user_id: UserId) -> int:
        """Cancel every active row of the pair. Returns how many were cancelled."""
        ctx = ErrorContext(event_id=event_id, user_id=user_id)
        async with atomic(self.db, "cancel enrollment", context=ctx):
            result = await self.db.execute(
                update(Enrollment)
                .where(_active_rows(event_id, user_id))
                .values(status=CANCELLED)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                raise ResourceNotFoundError(
                    "Enrollment", f"event={event_id} user={user_id}", ctx,
                )
        logger.info(
            f"Enrollment cancelled ({result.rowcount} participant(s))",
            extra={"event_id": event_id, "user_id": user_id},
        )
        return result.rowcount

    async def list_enrolled_events(self, user_id: UserId) -> list[dict]:
        """Events where the user has active participants, with the user's own count."""
        if await self.db.get(User, user_id) is None:
            raise ResourceNotFoundError(
                "User", user_id, ErrorContext(user_id=user_id),
            )

        own = (
            select(
                Enrollment.event_id,
                func.count(Enrollment.id).label("participants_count"),
            )
            .where(Enrollment.user_id == user_id)
            .where(Enrollment.status == ENROLLED)
            .group_by(Enrollment.event_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Event, subscribers_count_column(), own.c.participants_count)
            .join(own, own.c.event_id == Event.id)
            .order_by(Event.event_date.asc(), Event.id.asc()),
        )
        return [
            {**project_event(event, count), "participantsCount": int(mine)}
            for event, count, mine in result.all()
        ]
