"""Transaction boundary — rollback before any error leaves atomic().

Invariants:
    - Domain errors raised mid-block leave no rows behind and propagate unchanged
    - Store errors roll back and surface as DatabaseError (500)
    - Unique violations can be surfaced as ConflictError (409)
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select, text

from koinonia.core.errors import (
    ConflictError, DatabaseError, ResourceNotFoundError,
)
from koinonia.models.enrollment import Enrollment
from koinonia.models.user import User
from koinonia.services.transactions import atomic


async def _count(session, model) -> int:
    result = await session.execute(select(func.count(model.id)))
    return result.scalar_one()


async def test_commit_on_success(test_session_factory, seed_user, seed_event):
    async with test_session_factory() as db:
        async with atomic(db, "test insert"):
            db.add(Enrollment(
                user_id=seed_user.id, event_id=seed_event.id,
                participant_name="Ana",
            ))
    async with test_session_factory() as check:
        assert await _count(check, Enrollment) == 1


async def test_domain_error_rolls_back_flushed_rows(
    test_session_factory, seed_user, seed_event,
):
    async with test_session_factory() as db:
        with pytest.raises(ResourceNotFoundError):
            async with atomic(db, "test insert"):
                db.add(Enrollment(
                    user_id=seed_user.id, event_id=seed_event.id,
                    participant_name="Ana",
                ))
                await db.flush()
                raise ResourceNotFoundError("User", 2)
    async with test_session_factory() as check:
        assert await _count(check, Enrollment) == 0


async def test_store_error_becomes_database_error(test_session_factory):
    async with test_session_factory() as db:
        with pytest.raises(DatabaseError) as exc:
            async with atomic(db, "broken query"):
                await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 500
    assert "no_such_table" not in exc.value.to_response()["error"]["message"]


async def test_unique_violation_can_be_a_conflict(test_session_factory, seed_user):
    async with test_session_factory() as db:
        with pytest.raises(ConflictError):
            async with atomic(db, "create user", conflict_message="taken"):
                db.add(User(
                    name="Clone", email=seed_user.email, password_hash="x",
                    created_at=datetime.now(timezone.utc),
                ))
    async with test_session_factory() as check:
        assert await _count(check, User) == 1
