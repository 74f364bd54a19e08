"""Health Probe — process and database status.

Invariants:
    - GET /health returns 200 {"status": "ok", "db": "ok"} when SELECT 1 succeeds
    - Returns 500 {"status": "error", "db": "error"} otherwise (no driver detail)
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from koinonia.infrastructure.database import get_db_manager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    """Service banner."""
    return {"message": "Koinonia API running"}


@router.get("/health")
async def health_check(request: Request):
    """Liveness + database connectivity."""
    db_manager = get_db_manager(request)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "db": "error"},
        )
    return {"status": "ok", "db": "ok"}
