"""User Service — signup and login.

Invariants:
    - Emails are unique: a taken email raises ConflictError (409), checked before
      hashing and again by the unique index at commit
    - Password hashes never leave this module
    - Unknown email and wrong password are indistinguishable (AuthenticationError)
    - Token claims: id, email, role, name

Design Decisions:
    - Hashing and signing injected as CredentialStore / TokenIssuer protocols
    - bcrypt hash/verify run in the threadpool (run_in_threadpool), never on the event loop
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from koinonia.core.boundary_protocols import CredentialStore, TokenIssuer
from koinonia.core.domain_types import UserRole
from koinonia.core.errors import AuthenticationError, ConflictError
from koinonia.models.user import User
from koinonia.schemas.user import LoginRequest, UserCreate
from koinonia.services.transactions import atomic

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already in use"


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


class UserService:
    """Account creation and credential checks."""

    def __init__(
        self, db: AsyncSession, credentials: CredentialStore,
        tokens: TokenIssuer | None = None,
    ):
        self.db = db
        self.credentials = credentials
        self.tokens = tokens

    async def create_user(self, body: UserCreate) -> dict:
        """Register a new user. Raises ConflictError on duplicate email."""
        existing = await self.db.execute(
            select(User.id).where(User.email == body.email),
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(EMAIL_TAKEN)

        password_hash = await run_in_threadpool(self.credentials.hash, body.password)
        user = User(
            name=body.name,
            email=body.email,
            password_hash=password_hash,
            role=body.role or UserRole.MEMBER.value,
        )
        async with atomic(self.db, "create user", conflict_message=EMAIL_TAKEN):
            self.db.add(user)
        logger.info("User created", extra={"user_id": user.id})
        return serialize_user(user)

    async def authenticate(self, body: LoginRequest) -> dict:
        """Check credentials and issue a token."""
        result = await self.db.execute(
            select(User).where(User.email == body.email),
        )
        user = result.scalar_one_or_none()
        if user is None or not await run_in_threadpool(
            self.credentials.verify, body.password, user.password_hash,
        ):
            raise AuthenticationError()

        token = self.tokens.issue({
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "name": user.name,
        })
        logger.info("User logged in", extra={"user_id": user.id})
        return {
            "token": token,
            "user": {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "role": user.role,
            },
        }
