"""Trace ID Middleware — attaches a trace identifier to every request/response.

Invariants:
    - Every HTTP request gets scope["state"]["trace_id"] before any route runs
    - An inbound trace header is honoured; otherwise a uuid4 is generated
    - The trace id is echoed on the response under the same header
    - Responses built by ServerErrorMiddleware (the catch-all Exception handler)
      never pass back through this middleware; that handler echoes the header itself

Design Decisions:
    - Pure ASGI instead of BaseHTTPMiddleware: does not swallow response headers
      (including CORS) on error paths
"""

import uuid
from typing import Any

from starlette.types import ASGIApp, Receive, Scope, Send

DEFAULT_TRACE_HEADER = "X-Request-Id"


class TraceIDMiddleware:
    def __init__(self, app: ASGIApp, header_name: str = DEFAULT_TRACE_HEADER) -> None:
        self.app = app
        self.header = header_name.lower().encode("latin-1")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        trace_id = ""
        for header_name, header_value in scope.get("headers", []):
            if header_name == self.header:
                trace_id = header_value.decode("latin-1")
                break
        if not trace_id:
            trace_id = str(uuid.uuid4())

        scope.setdefault("state", {})["trace_id"] = trace_id

        async def send_wrapper(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((self.header, trace_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
