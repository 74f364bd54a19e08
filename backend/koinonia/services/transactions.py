"""Transaction Boundary — commit on success, full rollback on any failure.

Invariants:
    - Body succeeds -> exactly one commit
    - Body raises -> rollback BEFORE the error leaves the block; nothing partial persists
    - Domain errors (KoinoniaError) are re-raised unchanged
    - Store errors become DatabaseError; driver detail goes to the log only
    - No retries

Design Decisions:
    - Unique-key violations can be surfaced as ConflictError (409) by passing
      conflict_message, for races the read-side check cannot see
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from koinonia.core.errors import (
    ConflictError, DatabaseError, ErrorContext, KoinoniaError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(
    db: AsyncSession,
    operation: str,
    *,
    conflict_message: str | None = None,
    context: ErrorContext | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Run the block as one transaction on db."""
    try:
        yield db
        await db.commit()
    except KoinoniaError:
        await db.rollback()
        raise
    except IntegrityError as e:
        await db.rollback()
        logger.error(
            f"Integrity error during {operation}: {e}",
            extra=_log_extra(context),
        )
        if conflict_message:
            raise ConflictError(conflict_message, context) from e
        raise DatabaseError("Integrity constraint violated", operation, context) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Store error during {operation}: {e}",
            extra=_log_extra(context), exc_info=True,
        )
        raise DatabaseError("Store operation failed", operation, context) from e


def _log_extra(context: ErrorContext | None) -> dict:
    if context is None:
        return {}
    return {"event_id": context.event_id, "user_id": context.user_id}
