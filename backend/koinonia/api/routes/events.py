"""Event Routes — create, list and show events.

Invariants:
    - Every event leaves through core/event_projection.py (same shape everywhere)
    - Invalid date on create -> 400 before any store access
    - Unknown event id -> 404; malformed id -> 400
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.identifiers import parse_event_id
from koinonia.infrastructure.database import get_db
from koinonia.schemas.event import EventCreate
from koinonia.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventCreate, db: AsyncSession = Depends(get_db),
):
    """Create an event. price accepts "Gratuito", "R$ 25,90", etc."""
    return await EventService(db).create_event(body)


@router.get("")
async def list_events(db: AsyncSession = Depends(get_db)):
    """All events, soonest first, with active subscriber counts."""
    return await EventService(db).list_events()


@router.get("/{event_id}")
async def get_event(event_id: str, db: AsyncSession = Depends(get_db)):
    eid = parse_event_id(event_id)
    return await EventService(db).get_event(eid)
