"""API Dependencies — per-request context and service wiring.

Invariants:
    - FastAPI caches dependencies per request: one RequestContext per request
    - Services receive their repository through the constructor, never by lookup

Design Decisions:
    - Annotated aliases keep route signatures short (ADR: `ctx: Ctx, service: DemoServiceDep`)
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from admin_backend.api.context import RequestContext
from admin_backend.db.demo_repository import SqlDemoRepository
from admin_backend.infrastructure.database import get_db
from admin_backend.services.demo_service import DemoService


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(request)


def get_demo_service(db: AsyncSession = Depends(get_db)) -> DemoService:
    return DemoService(SqlDemoRepository(db))


Ctx = Annotated[RequestContext, Depends(get_request_context)]
DemoServiceDep = Annotated[DemoService, Depends(get_demo_service)]
