"""Event Projection — shapes stored events and enrollment rows for clients.

Invariants:
    - Pure: reads attributes only, no IO
    - date rendered as "DD/MM/YYYY", price as pt-BR currency text or the free label
    - subscribersCount is always a non-negative int (None / NaN / junk -> 0)
"""

import math
from typing import Protocol

from koinonia.core.domain_types import EnrollmentId, EventId, PriceCents, UserId
from koinonia.core.formatting import format_event_date, format_price


class EventLike(Protocol):
    """Structural contract for event rows (ORM model or test double)."""
    id: EventId
    title: str
    description: str | None
    attractions: str | None
    location: str
    event_date: object
    price_cents: PriceCents
    is_free: bool
    image_url: str | None
    created_by_id: UserId | None


def coerce_count(value: object) -> int:
    """Aggregate results arrive as int, Decimal, str or None depending on driver."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0
    return int(number)


def project_event(event: EventLike, subscribers_count: object = 0) -> dict:
    """Build the external event representation."""
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "attractions": event.attractions,
        "location": event.location,
        "date": format_event_date(event.event_date),
        "price": format_price(event.price_cents, event.is_free),
        "isFree": bool(event.is_free),
        "imageUrl": event.image_url,
        "createdById": event.created_by_id,
        "subscribersCount": coerce_count(subscribers_count),
    }


class ParticipantRowLike(Protocol):
    """Structural contract for enrollment rows."""
    id: EnrollmentId
    participant_name: str
    participant_age: int | None
    status: str
    created_at: object


def project_participant(row: ParticipantRowLike, detailed: bool = True) -> dict:
    """External shape of one enrollment row."""
    participant = {
        "id": row.id,
        "name": row.participant_name,
        "age": row.participant_age,
    }
    if detailed:
        created = row.created_at
        participant["status"] = row.status
        participant["createdAt"] = (
            created.isoformat() if hasattr(created, "isoformat") else created
        )
    return participant
