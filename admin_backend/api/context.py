"""Request Context — one typed wrapper around one request and its single response.

Invariants:
    - One RequestContext per request; never shared across requests
    - trace_id/user_id are read once from request state set by upstream middleware
    - Session data lives in the signed session cookie; without SessionMiddleware
      session access raises InternalError
    - Exactly one respond_* call per context; a second raises ResponseAlreadySentError
    - Every body is UTF-8 JSON with Content-Type "application/json; charset=utf-8"
    - Error bodies carry only the outermost message segment; full detail goes to the log
    - 4xx logs at WARNING with the raw error; 5xx logs at ERROR with the innermost stack frames

Design Decisions:
    - respond_* return the JSONResponse so routes read `return ctx.respond_ok()`
    - respond_page derives pagination from this request, never from the caller
    - Serialization failures are re-answered as server errors on the same context
"""

import logging
import time
import traceback
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError as PydanticValidationError
from starlette.requests import Request

from admin_backend.core.errors import (
    ErrorClass, InternalError, ValidationError,
    classify_status, status_for, surface_message,
)
from admin_backend.core.domain_types import TraceId, UserId
from admin_backend.core.pagination import parse_page_index, parse_page_size
from admin_backend.schemas.envelope import (
    ErrorEnvelope, ListEnvelope, Pagination, StatusEnvelope,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
CLIENT_ERROR_MESSAGE = "Request error"
SERVER_ERROR_MESSAGE = "Server error"
STACK_DEPTH = 2
SESSION_ISSUED_KEY = "issued_at"


class ResponseAlreadySentError(RuntimeError):
    """A second respond_* call was made on the same request context."""


class RequestContext:
    """Typed access to one request's inputs and its single JSON output."""

    def __init__(self, request: Request):
        self.request = request
        self._trace_id = TraceId(getattr(request.state, "trace_id", "") or "")
        self._user_id = UserId(getattr(request.state, "user_id", "") or "")
        self.response: JSONResponse | None = None
        self.response_body: bytes | None = None

    # ─── Inputs ──────────────────────────────────────────────────

    def param(self, key: str) -> str:
        """Path parameter (/demos/{record_id}); "" when absent."""
        return str(self.request.path_params.get(key, ""))

    def query(self, key: str) -> str:
        """Query parameter (/demos?code=); "" when absent."""
        return self.request.query_params.get(key, "")

    def page_index(self) -> int:
        return parse_page_index(self.query("current"))

    def page_size(self) -> int:
        return parse_page_size(self.query("pageSize"))

    @property
    def trace_id(self) -> TraceId:
        return self._trace_id

    @property
    def user_id(self) -> UserId:
        return self._user_id

    def set_user_id(self, user_id: str) -> None:
        """Record the caller's id for the rest of this request only."""
        self._user_id = UserId(user_id)
        self.request.state.user_id = user_id

    def log_extra(self) -> dict[str, str]:
        return {"trace_id": self._trace_id, "user_id": self._user_id}

    async def parse_json(self, model_cls: type[BaseModel]) -> Any:
        """Decode the body into model_cls. All or nothing: raises ValidationError on any problem."""
        body = await self.request.body()
        if not body:
            raise ValidationError("Invalid request body", cause=ValueError("empty body"))
        try:
            return model_cls.model_validate_json(body)
        except PydanticValidationError as e:
            raise ValidationError("Invalid request body", cause=e) from e

    # ─── Session store ───────────────────────────────────────────

    @property
    def session(self) -> dict[str, Any]:
        """The caller's session data; mutations are written back with the response."""
        if "session" not in self.request.scope:
            raise InternalError("Session store unavailable")
        return self.request.session

    def refresh_session(self) -> dict[str, Any]:
        """Re-issue the session with its current data and a new issue time."""
        session = self.session
        session[SESSION_ISSUED_KEY] = int(time.time())
        return session

    def destroy_session(self) -> None:
        """Drop all session data; the cookie is expired on the response."""
        self.session.clear()

    # ─── Success responses ───────────────────────────────────────

    def respond_success(self, payload: Any = None) -> JSONResponse:
        if payload is None:
            payload = {}
        return self.respond_json(200, payload)

    def respond_list(self, items: list) -> JSONResponse:
        return self.respond_success(ListEnvelope(items=items).to_content())

    def respond_page(self, total: int, items: list) -> JSONResponse:
        envelope = ListEnvelope(
            items=items,
            pagination=Pagination(
                total=total,
                current=self.page_index(),
                page_size=self.page_size(),
            ),
        )
        return self.respond_success(envelope.to_content())

    def respond_ok(self) -> JSONResponse:
        return self.respond_success(StatusEnvelope().to_content())

    # ─── Error responses ─────────────────────────────────────────

    def respond_bad_request(
        self, err: BaseException | None, code: int | None = None,
    ) -> JSONResponse:
        return self.respond_error(err, 400, code)

    def respond_server_error(
        self, err: BaseException | None, code: int | None = None,
    ) -> JSONResponse:
        """500 unless the error's kind names a client status (e.g. not found -> 404)."""
        return self.respond_error(err, status_for(err), code)

    def respond_error(
        self, err: BaseException | None, status: int, code: int | None = None,
    ) -> JSONResponse:
        message = surface_message(err)
        error_class = classify_status(status)

        if error_class is ErrorClass.CLIENT:
            message = message or CLIENT_ERROR_MESSAGE
            if err is not None:
                logger.warning(
                    f"[request error] {message}",
                    extra={**self.log_extra(), "error": str(err), "status": status},
                )
        elif error_class is ErrorClass.SERVER:
            message = message or SERVER_ERROR_MESSAGE
            if err is not None:
                extra = {**self.log_extra(), "status": status}
                stack = _innermost_frames(err)
                if stack:
                    extra["stack"] = stack
                logger.error(f"[server error] {err}", extra=extra)

        return self.respond_json(status, ErrorEnvelope.build(message, code).to_content())

    # ─── Emission ────────────────────────────────────────────────

    def respond_json(self, status: int, payload: Any) -> JSONResponse:
        """Render payload and claim this context's single response."""
        if self.response is not None:
            raise ResponseAlreadySentError(
                f"response already sent for {self.request.url.path}",
            )
        try:
            response = JSONResponse(
                content=jsonable_encoder(payload),
                status_code=status,
                media_type=JSON_MEDIA_TYPE,
            )
        except (TypeError, ValueError) as e:
            return self.respond_server_error(
                InternalError("JSON serialization failed", cause=e),
            )
        self.response = response
        self.response_body = bytes(response.body)
        return response


def _innermost_frames(err: BaseException) -> str:
    """The frames closest to where err was raised, innermost first."""
    tb = err.__traceback__
    if tb is None and err.__cause__ is not None:
        tb = err.__cause__.__traceback__
    if tb is None:
        return ""
    frames = traceback.extract_tb(tb)[-STACK_DEPTH:]
    return "".join(traceback.format_list(list(reversed(frames))))
