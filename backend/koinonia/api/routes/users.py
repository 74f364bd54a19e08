"""User Routes — signup and a user's enrolled events.

Invariants:
    - POST /users returns 201 with the public user (never the hash)
    - Duplicate email -> 409; missing name/email/password -> 400
    - Path ids parsed by core/identifiers.py before any query
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.identifiers import parse_user_id
from koinonia.infrastructure.database import get_db
from koinonia.infrastructure.security import (
    PasslibCredentialStore, get_credential_store,
)
from koinonia.schemas.user import UserCreate
from koinonia.services.enrollment_service import EnrollmentService
from koinonia.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    credentials: PasslibCredentialStore = Depends(get_credential_store),
):
    """Register a user (role defaults to "member")."""
    return await UserService(db, credentials).create_user(body)


@router.get("/{user_id}/enrolled-events")
async def list_enrolled_events(
    user_id: str, db: AsyncSession = Depends(get_db),
):
    """Events the user currently has active participants in."""
    uid = parse_user_id(user_id)
    return await EnrollmentService(db).list_enrolled_events(uid)
