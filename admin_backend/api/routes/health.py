"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness failure answered through the error envelope like every other failure
"""

import logging
from fastapi import APIRouter

from admin_backend.api.dependencies import Ctx
from admin_backend.core.errors import InternalError
import admin_backend.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def health_check(ctx: Ctx):
    """Basic liveness probe. Returns 200 if the process is up."""
    return ctx.respond_ok()


@router.get("/ready")
async def readiness_check(ctx: Ctx):
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return ctx.respond_error(InternalError("Database unavailable"), 503)
    return ctx.respond_ok()
