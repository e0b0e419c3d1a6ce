"""Response Envelopes — the four wire shapes every endpoint answers with.

Invariants:
    - Success: the payload itself, {} when there is no payload (never null)
    - List: {"list": [...]} plus optional {"pagination": {total, current, pageSize}}
    - Status: {"status": "OK"}
    - Error: {"error": {"message": ..., "code"?: ...}} — code omitted when absent or zero

Design Decisions:
    - Python-friendly field names with serialization aliases for the camelCase wire keys
    - to_content() is the single serialization entry point (by_alias, exclude_none)
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

STATUS_OK = "OK"


class _Envelope(BaseModel):
    def to_content(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Pagination(BaseModel):
    """Pagination block — always derived from the request's own paging params."""
    total: int
    current: int
    page_size: int = Field(serialization_alias="pageSize")


class ListEnvelope(_Envelope):
    items: list[Any] = Field(default_factory=list, serialization_alias="list")
    pagination: Pagination | None = None


class StatusEnvelope(_Envelope):
    status: Literal["OK"] = STATUS_OK


class ErrorItem(BaseModel):
    message: str
    code: int | None = None


class ErrorEnvelope(_Envelope):
    error: ErrorItem

    @classmethod
    def build(cls, message: str, code: int | None = None) -> "ErrorEnvelope":
        return cls(error=ErrorItem(message=message, code=code or None))
