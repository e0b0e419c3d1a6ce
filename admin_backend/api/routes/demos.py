"""Demo Routes — HTTP surface of the demo record CRUD service.

Invariants:
    - Every handler answers through RequestContext exactly once
    - Paging comes from the `current`/`pageSize` query params via the context
    - creator is taken from the request's user id, never from the body

Design Decisions:
    - Business errors (AdminError) answered with respond_server_error: kind decides the status
    - Unexpected exceptions left to the global catch-all handler (api/error_handlers.py)
"""

import logging

from fastapi import APIRouter

from admin_backend.api.dependencies import Ctx, DemoServiceDep
from admin_backend.core.domain_types import DemoStatus, RecordId
from admin_backend.core.errors import AdminError, ValidationError
from admin_backend.schemas.demo import Demo, DemoQueryParams

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/demos", tags=["demos"])


def _query_params(ctx) -> DemoQueryParams:
    """Build list filters from the query string; raises ValidationError on a bad status."""
    status = None
    if raw := ctx.query("status"):
        try:
            status = DemoStatus(int(raw))
        except ValueError as e:
            raise ValidationError("Invalid status", cause=e) from e
    return DemoQueryParams(
        code=ctx.query("code") or None,
        name=ctx.query("name") or None,
        status=status,
    )


def _record_id(ctx) -> RecordId:
    return RecordId(ctx.param("record_id"))


@router.get("")
async def query_demos(ctx: Ctx, service: DemoServiceDep):
    """Paged list of live demo records."""
    try:
        params = _query_params(ctx)
    except ValidationError as e:
        return ctx.respond_bad_request(e)

    try:
        total, items = await service.query_page(
            params, ctx.page_index(), ctx.page_size(),
        )
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_page(total, items)


@router.get("/{record_id}")
async def get_demo(ctx: Ctx, service: DemoServiceDep):
    try:
        item = await service.get(_record_id(ctx))
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_success(item)


@router.post("")
async def create_demo(ctx: Ctx, service: DemoServiceDep):
    try:
        item = await ctx.parse_json(Demo)
    except ValidationError as e:
        return ctx.respond_bad_request(e)

    item.creator = ctx.user_id
    try:
        await service.create(item)
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_success(item)


@router.put("/{record_id}")
async def update_demo(ctx: Ctx, service: DemoServiceDep):
    try:
        item = await ctx.parse_json(Demo)
    except ValidationError as e:
        return ctx.respond_bad_request(e)

    try:
        await service.update(_record_id(ctx), item)
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_ok()


@router.delete("/{record_id}")
async def delete_demo(ctx: Ctx, service: DemoServiceDep):
    try:
        await service.delete(_record_id(ctx))
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_ok()


@router.patch("/{record_id}/enable")
async def enable_demo(ctx: Ctx, service: DemoServiceDep):
    return await _set_status(ctx, service, DemoStatus.ENABLED)


@router.patch("/{record_id}/disable")
async def disable_demo(ctx: Ctx, service: DemoServiceDep):
    return await _set_status(ctx, service, DemoStatus.DISABLED)


async def _set_status(ctx, service, status: DemoStatus):
    try:
        await service.update_status(_record_id(ctx), status)
    except AdminError as e:
        return ctx.respond_server_error(e)
    return ctx.respond_ok()
