"""Error Hierarchy — typed, kind-tagged exceptions for every admin failure mode.

Invariants:
    - Every error has a kind (ErrorKind); the kind alone decides the HTTP status
    - Errors are compared by kind, never by identity (no shared sentinel instances)
    - str(err) renders a "context: cause" chain; only the first segment is user-facing
    - No framework imports: this module is usable from services and repositories alike

Design Decisions:
    - Single hierarchy with AdminError base: one FastAPI handler catches all (ADR: uniform error shape)
    - Conflict maps to 400, not 409: existing admin clients treat duplicate codes as bad input
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error variants."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ErrorClass(str, Enum):
    """Which side of the wire caused the failure."""
    CLIENT = "client"
    SERVER = "server"


_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INTERNAL: 500,
}


class AdminError(Exception):
    """Base exception for all admin backend errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INTERNAL,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def http_status(self) -> int:
        return _KIND_STATUS[self.kind]

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        cause = str(self.cause)
        if not cause:
            return self.message
        return f"{self.message}: {cause}"


# ─── Client-class errors (400-level) ────────────────────────────

class ValidationError(AdminError):
    """Malformed request body or query parameter."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message, ErrorKind.VALIDATION, cause)


class NotFoundError(AdminError):
    """Referenced record does not exist."""
    def __init__(
        self, message: str = "Resource not found", cause: BaseException | None = None,
    ):
        super().__init__(message, ErrorKind.NOT_FOUND, cause)


class ConflictError(AdminError):
    """Business key uniqueness violated."""
    def __init__(
        self, message: str = "Code already exists", cause: BaseException | None = None,
    ):
        super().__init__(message, ErrorKind.CONFLICT, cause)


# ─── Server-class errors (500-level) ────────────────────────────

class InternalError(AdminError):
    """Persistence, serialization or other unexpected failure."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message, ErrorKind.INTERNAL, cause)


# ─── Classification ─────────────────────────────────────────────

def is_not_found(err: BaseException | None) -> bool:
    return isinstance(err, AdminError) and err.kind is ErrorKind.NOT_FOUND


def status_for(err: BaseException | None) -> int:
    """HTTP status for an error: the kind's status for AdminError, else 500."""
    if is_not_found(err):
        return _KIND_STATUS[ErrorKind.NOT_FOUND]
    if isinstance(err, AdminError):
        return err.http_status
    return 500


def classify_status(status: int) -> ErrorClass | None:
    """Client for 4xx, server for 5xx, None for anything else."""
    if 400 <= status < 500:
        return ErrorClass.CLIENT
    if 500 <= status < 600:
        return ErrorClass.SERVER
    return None


def surface_message(err: BaseException | None) -> str:
    """Outermost context phrase of an error chain — the only part shown to clients."""
    if err is None:
        return ""
    return str(err).split(": ")[0]
