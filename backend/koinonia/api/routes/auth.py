"""Auth Routes — login issues a JWT; logout is stateless.

Invariants:
    - Wrong email and wrong password both return 401 with the same message
    - Logout never fails (tokens are discarded client-side)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.infrastructure.database import get_db
from koinonia.infrastructure.security import (
    JoseTokenIssuer, PasslibCredentialStore,
    get_credential_store, get_token_issuer,
)
from koinonia.schemas.user import LoginRequest
from koinonia.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    credentials: PasslibCredentialStore = Depends(get_credential_store),
    tokens: JoseTokenIssuer = Depends(get_token_issuer),
):
    """Exchange email + password for a token and the public user."""
    return await UserService(db, credentials, tokens).authenticate(body)


@router.post("/logout")
async def logout():
    # TODO: add a token denylist once tokens are verified server-side
    return {"message": "Logged out"}
