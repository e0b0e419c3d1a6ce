"""API test fixtures — bare Starlette requests for RequestContext unit tests."""

import pytest
from starlette.requests import Request


def _build_request(
    query_string: str = "",
    path_params: dict | None = None,
    body: bytes = b"",
    state: dict | None = None,
    path: str = "/api/v1/demos",
    session: dict | None = None,
) -> Request:
    scope = {
        "type": "http",
        "method": "POST" if body else "GET",
        "scheme": "http",
        "server": ("test", 80),
        "root_path": "",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query_string.encode(),
        "headers": [(b"content-type", b"application/json")],
        "path_params": path_params or {},
        "state": dict(state or {}),
    }
    if session is not None:
        scope["session"] = session

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request():
    """Factory: make_request(query_string=..., path_params=..., body=..., state=..., session=...)."""
    return _build_request
