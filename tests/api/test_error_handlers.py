"""Global error handlers — envelopes and trace header on escaped exceptions."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from admin_backend.api.error_handlers import register_error_handlers
from admin_backend.core.errors import NotFoundError
from admin_backend.infrastructure.tracing import TraceIDMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(TraceIDMiddleware, header_name="X-Request-Id")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("disk on fire")

    @app.get("/missing")
    async def missing():
        raise NotFoundError()

    register_error_handlers(app)
    return app


def _client() -> AsyncClient:
    # ServerErrorMiddleware re-raises after answering
    transport = ASGITransport(app=_app(), raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


async def test_unhandled_exception_is_500_without_details():
    async with _client() as c:
        res = await c.get("/boom")
    assert res.status_code == 500
    assert res.json() == {"error": {"message": "Server error"}}


async def test_unhandled_exception_echoes_trace_header():
    async with _client() as c:
        res = await c.get("/boom", headers={"X-Request-Id": "trace-500"})
    assert res.headers["x-request-id"] == "trace-500"


async def test_unhandled_exception_echoes_generated_trace_id():
    async with _client() as c:
        res = await c.get("/boom")
    assert res.headers["x-request-id"]


async def test_escaped_admin_error_uses_kind_status():
    async with _client() as c:
        res = await c.get("/missing", headers={"X-Request-Id": "trace-404"})
    assert res.status_code == 404
    assert res.json() == {"error": {"message": "Resource not found"}}
    assert res.headers["x-request-id"] == "trace-404"
