"""Boundary Protocols — contracts between the service layer and persistence.

Invariants:
    - Services NEVER import a concrete repository — dependency arrows point inward only
    - Every read ignores soft-deleted rows (deleted != 0)
    - Implementations enforce code uniqueness among live rows themselves
      (the service's check-then-write is not atomic)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Any, Protocol

from admin_backend.core.domain_types import RecordId
from admin_backend.schemas.demo import Demo, DemoQueryParams


class DemoRepository(Protocol):
    """Contract for demo record persistence — implemented by db/demo_repository.py."""
    async def query_page(
        self, params: DemoQueryParams, page_index: int, page_size: int,
    ) -> tuple[int, list[Demo]]: ...
    async def get(self, record_id: RecordId) -> Demo | None: ...
    async def check_code_exists(self, code: str) -> bool: ...
    async def check_exists(self, record_id: RecordId) -> bool: ...
    async def create(self, item: Demo) -> None: ...
    async def update(self, record_id: RecordId, changes: dict[str, Any]) -> None: ...
    async def delete(self, record_id: RecordId) -> None: ...
