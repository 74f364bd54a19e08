"""Event Service — create, list and fetch events with their subscriber counts.

Invariants:
    - subscribersCount counts ONLY enrolled rows (cancelled rows excluded)
    - Listing order: event_date ascending, then id ascending
    - Price text parsed once at creation (core/formatting.py); storage keeps centavos
    - A given createdById must reference an existing user (404 otherwise)

Design Decisions:
    - Count as a correlated scalar subquery: one statement, portable across
      PostgreSQL and SQLite, no GROUP BY over every event column
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.domain_types import EnrollmentStatus, EventId
from koinonia.core.errors import ErrorContext, ResourceNotFoundError
from koinonia.core.event_projection import project_event
from koinonia.core.formatting import parse_price
from koinonia.models.enrollment import Enrollment
from koinonia.models.event import Event
from koinonia.models.user import User
from koinonia.schemas.event import EventCreate
from koinonia.services.transactions import atomic

logger = logging.getLogger(__name__)


def subscribers_count_column():
    """Active enrollment count for the Event in the enclosing query."""
    return (
        select(func.count(Enrollment.id))
        .where(Enrollment.event_id == Event.id)
        .where(Enrollment.status == EnrollmentStatus.ENROLLED.value)
        .correlate(Event)
        .scalar_subquery()
        .label("subscribers_count")
    )


class EventService:
    """Event catalog operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_event(self, body: EventCreate) -> dict:
        """Persist a new event and return its projection (0 subscribers)."""
        if body.created_by_id is not None:
            creator = await self.db.get(User, body.created_by_id)
            if creator is None:
                raise ResourceNotFoundError(
                    "User", body.created_by_id,
                    ErrorContext(user_id=body.created_by_id),
                )

        price = parse_price(body.price)
        event = Event(
            title=body.title,
            description=body.description,
            attractions=body.attractions,
            location=body.location,
            event_date=body.event_date,
            price_cents=price.minor_units,
            is_free=price.is_free,
            image_url=body.image_url,
            created_by_id=body.created_by_id,
        )
        async with atomic(self.db, "create event"):
            self.db.add(event)
        logger.info("Event created", extra={"event_id": event.id})
        return project_event(event, 0)

    async def list_events(self) -> list[dict]:
        result = await self.db.execute(
            select(Event, subscribers_count_column())
            .order_by(Event.event_date.asc(), Event.id.asc()),
        )
        return [project_event(event, count) for event, count in result.all()]

    async def get_event(self, event_id: EventId) -> dict:
        """Return one event projection. Raises ResourceNotFoundError."""
        result = await self.db.execute(
            select(Event, subscribers_count_column())
            .where(Event.id == event_id),
        )
        row = result.first()
        if row is None:
            raise ResourceNotFoundError(
                "Event", event_id, ErrorContext(event_id=event_id),
            )
        event, count = row
        return project_event(event, count)
