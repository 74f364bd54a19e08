"""Enrollment Routes — add, show and cancel a user's participants for an event.

Invariants:
    - POST returns 201 with the created rows, or 200 when every participant
      was already enrolled (nothing written)
    - GET returns only active participants; none -> 404
    - DELETE cancels (status flip), never deletes; nothing active -> 404
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.event_projection import project_participant
from koinonia.core.identifiers import parse_event_id, parse_user_id
from koinonia.infrastructure.database import get_db
from koinonia.schemas.enrollment import EnrollmentCreate
from koinonia.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/events", tags=["enrollments"])


@router.post("/{event_id}/enrollments")
async def add_participants(
    event_id: str, body: EnrollmentCreate, db: AsyncSession = Depends(get_db),
):
    """Add participants; duplicates of active participants are skipped."""
    eid = parse_event_id(event_id)
    created = await EnrollmentService(db).add_participants(eid, body)
    if not created:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "No new participants to add",
                "eventId": eid,
                "userId": body.user_id,
                "participants": [],
            },
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={
            "message": "Participants added",
            "eventId": eid,
            "userId": body.user_id,
            "participants": [project_participant(row) for row in created],
        },
    )


@router.get("/{event_id}/enrollments/{user_id}")
async def get_participants(
    event_id: str, user_id: str, db: AsyncSession = Depends(get_db),
):
    eid = parse_event_id(event_id)
    uid = parse_user_id(user_id)
    rows = await EnrollmentService(db).list_participants(eid, uid)
    return {
        "userId": uid,
        "eventId": eid,
        "participants": [
            project_participant(row, detailed=False) for row in rows
        ],
    }


@router.delete("/{event_id}/enrollments/{user_id}")
async def cancel_enrollment(
    event_id: str, user_id: str, db: AsyncSession = Depends(get_db),
):
    """Cancel every active participant the user has in the event."""
    eid = parse_event_id(event_id)
    uid = parse_user_id(user_id)
    cancelled = await EnrollmentService(db).cancel_enrollment(eid, uid)
    return {"message": "Enrollment cancelled", "cancelled": cancelled}
