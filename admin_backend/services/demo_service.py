"""Demo Service — CRUD workflow for demo records.

Invariants:
    - Among live records the business code is unique (checked here, enforced by storage)
    - id, record_id, created, updated and deleted are assigned here on create, never taken from the client
    - Updates only touch whitelisted fields (see PROTECTED_FIELDS)
    - Missing records raise NotFoundError before any write is issued

Design Decisions:
    - Repository injected through the constructor (ADR: no string-tag wiring)
    - Code re-checked on update only when it changes: a record never collides with itself
"""

import logging
import time
import uuid

from admin_backend.core.domain_types import PROTECTED_FIELDS, DemoStatus, RecordId
from admin_backend.core.errors import ConflictError, NotFoundError
from admin_backend.core.repository_protocols import DemoRepository
from admin_backend.schemas.demo import Demo, DemoQueryParams

logger = logging.getLogger(__name__)


class DemoService:
    """Business rules for demo records."""

    def __init__(self, repository: DemoRepository):
        self._repo = repository

    async def query_page(
        self, params: DemoQueryParams, page_index: int, page_size: int,
    ) -> tuple[int, list[Demo]]:
        return await self._repo.query_page(params, page_index, page_size)

    async def get(self, record_id: RecordId) -> Demo:
        item = await self._repo.get(record_id)
        if item is None:
            raise NotFoundError()
        return item

    async def create(self, item: Demo) -> Demo:
        """Create a record. Mutates and returns item with its assigned identifiers."""
        if await self._repo.check_code_exists(item.code):
            raise ConflictError()

        item.id = 0
        item.record_id = str(uuid.uuid4())
        item.created = int(time.time())
        item.updated = 0
        item.deleted = 0
        await self._repo.create(item)
        logger.info(f"Demo {item.record_id} created")
        return item

    async def update(self, record_id: RecordId, item: Demo) -> None:
        old = await self._repo.get(record_id)
        if old is None:
            raise NotFoundError()

        changes = item.model_dump(exclude=set(PROTECTED_FIELDS), exclude_unset=True)
        new_code = changes.get("code")
        if new_code is not None and new_code != old.code:
            if await self._repo.check_code_exists(new_code):
                raise ConflictError()

        await self._repo.update(record_id, changes)

    async def delete(self, record_id: RecordId) -> None:
        if not await self._repo.check_exists(record_id):
            raise NotFoundError()
        await self._repo.delete(record_id)
        logger.info(f"Demo {record_id} deleted")

    async def update_status(self, record_id: RecordId, status: DemoStatus) -> None:
        if not await self._repo.check_exists(record_id):
            raise NotFoundError()
        await self._repo.update(record_id, {"status": int(status)})
