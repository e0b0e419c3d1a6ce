"""Error Handlers — global exception handlers for the admin API.

Invariants:
    - AdminError → error envelope with its kind's status (404 for not found, 400 for conflict)
    - RequestValidationError → 400 error envelope, field details only in the log
    - Exception (catch-all) → 500 error envelope that never leaks internal details
    - Every handler answers through RequestContext so logging stays uniform

Design Decisions:
    - Three-layer handler: domain (AdminError), validation (FastAPI), catch-all (Exception)
    - Extracted from main.py to keep the entry point thin
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from admin_backend.api.context import RequestContext
from admin_backend.config import get_settings
from admin_backend.core.errors import AdminError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_admin_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_admin_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(AdminError)
    async def admin_error_handler(request: Request, exc: AdminError):
        """Handle every AdminError that escaped a route."""
        return RequestContext(request).respond_server_error(exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Path/query parameters failed validation."""
        return RequestContext(request).respond_bad_request(
            ValidationError("Invalid request parameters", cause=_summarize(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details.

        Runs in ServerErrorMiddleware, outside TraceIDMiddleware, so the
        trace header is echoed here.
        """
        ctx = RequestContext(request)
        response = ctx.respond_server_error(
            InternalError("Server error", cause=exc),
        )
        if ctx.trace_id:
            response.headers[get_settings().trace_header] = ctx.trace_id
        return response


def _summarize(exc: RequestValidationError) -> ValueError:
    """Flatten validation errors into one loggable cause."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])} {e['msg']}"
        for e in exc.errors()
    )
    return ValueError(details)
