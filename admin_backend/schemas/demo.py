"""Demo Schemas — Pydantic models for the demo record at the API and persistence boundary.

Invariants:
    - code is 1-50 chars, stripped, non-empty
    - status is a DemoStatus value (1 enabled, 2 disabled)
    - Storage-owned fields (id, record_id, created, updated, deleted) default to zero values
      so clients may omit them; the service overwrites them on create

Design Decisions:
    - One Demo model for input and output: the service decides which fields survive
      (ADR: whitelist applied in DemoService.update, not in the schema)
    - from_attributes: repositories build Demo straight from ORM rows
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_backend.core.domain_types import DemoStatus


class Demo(BaseModel):
    """Demo record."""
    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    record_id: str = ""
    code: str = Field(min_length=1, max_length=50)
    name: str = Field("", max_length=100)
    memo: str = Field("", max_length=1024)
    status: DemoStatus = DemoStatus.ENABLED
    creator: str = ""
    created: int = 0
    updated: int = 0
    deleted: int = 0

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("code cannot be empty or whitespace")
        return v


class DemoQueryParams(BaseModel):
    """List filters — every field optional, None means "no filter"."""
    code: str | None = None
    name: str | None = None
    status: DemoStatus | None = None
