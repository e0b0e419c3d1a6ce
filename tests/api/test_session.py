"""Session store — RequestContext accessors over Starlette's signed-cookie sessions.

Invariants verified:
    - Session data written in one request is visible in the next
    - refresh_session keeps the data and stamps a new issue time
    - destroy_session drops the data and expires the cookie
    - Without SessionMiddleware, session access raises InternalError
"""

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request
from starlette.routing import Route

from admin_backend.api.context import SESSION_ISSUED_KEY, RequestContext
from admin_backend.core.errors import InternalError
from admin_backend.main import app as admin_app

COOKIE = "test_session"


async def _login(request: Request):
    ctx = RequestContext(request)
    ctx.session["user"] = "admin"
    return ctx.respond_ok()


async def _whoami(request: Request):
    ctx = RequestContext(request)
    return ctx.respond_success({"user": ctx.session.get("user")})


async def _refresh(request: Request):
    ctx = RequestContext(request)
    return ctx.respond_success(dict(ctx.refresh_session()))


async def _logout(request: Request):
    ctx = RequestContext(request)
    ctx.destroy_session()
    return ctx.respond_ok()


def _client() -> AsyncClient:
    app = Starlette(routes=[
        Route("/login", _login, methods=["POST"]),
        Route("/whoami", _whoami),
        Route("/refresh", _refresh, methods=["POST"]),
        Route("/logout", _logout, methods=["POST"]),
    ])
    app.add_middleware(SessionMiddleware, secret_key="test-secret", session_cookie=COOKIE)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# ─── Unit ────────────────────────────────────────────────────────

def test_session_reads_request_session(make_request):
    ctx = RequestContext(make_request(session={"user": "u-1"}))
    assert ctx.session == {"user": "u-1"}


def test_refresh_keeps_data_and_stamps_issue_time(make_request):
    ctx = RequestContext(make_request(session={"user": "u-1"}))
    session = ctx.refresh_session()
    assert session["user"] == "u-1"
    assert session[SESSION_ISSUED_KEY] > 0


def test_destroy_clears_session(make_request):
    data = {"user": "u-1"}
    RequestContext(make_request(session=data)).destroy_session()
    assert data == {}


def test_session_without_middleware_is_internal_error(make_request):
    ctx = RequestContext(make_request())
    with pytest.raises(InternalError) as exc_info:
        ctx.session
    assert exc_info.value.message == "Session store unavailable"
    with pytest.raises(InternalError):
        ctx.destroy_session()


# ─── Through SessionMiddleware ───────────────────────────────────

async def test_session_survives_between_requests():
    async with _client() as c:
        res = await c.post("/login")
        assert COOKIE in res.headers["set-cookie"]
        assert (await c.get("/whoami")).json() == {"user": "admin"}


async def test_refresh_reissues_cookie_with_same_data():
    async with _client() as c:
        await c.post("/login")
        res = await c.post("/refresh")
        assert res.json()["user"] == "admin"
        assert res.json()[SESSION_ISSUED_KEY] > 0
        assert COOKIE in res.headers["set-cookie"]
        assert (await c.get("/whoami")).json() == {"user": "admin"}


async def test_destroy_expires_cookie():
    async with _client() as c:
        await c.post("/login")
        res = await c.post("/logout")
        assert f"{COOKIE}=null" in res.headers["set-cookie"]
        assert "1970" in res.headers["set-cookie"]
        assert (await c.get("/whoami")).json() == {"user": None}


def test_admin_app_installs_session_middleware():
    assert any(m.cls is SessionMiddleware for m in admin_app.user_middleware)
