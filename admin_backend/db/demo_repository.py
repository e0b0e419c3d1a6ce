"""Demo Repository — SQLAlchemy implementation of the DemoRepository protocol.

Invariants:
    - Every query filters deleted == 0 (soft-deleted rows are invisible)
    - Writes commit on success and roll back on failure
    - IntegrityError -> ConflictError; any other SQLAlchemyError -> InternalError

Design Decisions:
    - Error mapping at the origin; all writes go through _writing() (ADR: no SQLAlchemy types past this file)
    - update() stamps `updated`; delete() stamps `deleted` with the current time
    - Pages past the storage integer range come back empty without a data query
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admin_backend.core.domain_types import RecordId
from admin_backend.core.errors import ConflictError, InternalError
from admin_backend.core.pagination import offset_in_range, page_offset
from admin_backend.models.demo import DemoRecord
from admin_backend.schemas.demo import Demo, DemoQueryParams

logger = logging.getLogger(__name__)


class SqlDemoRepository:
    """Demo persistence backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    def _live(self):
        return select(DemoRecord).where(DemoRecord.deleted == 0)

    async def query_page(
        self, params: DemoQueryParams, page_index: int, page_size: int,
    ) -> tuple[int, list[Demo]]:
        query = self._live()
        if params.code:
            query = query.where(DemoRecord.code == params.code)
        if params.name:
            query = query.where(DemoRecord.name.contains(params.name))
        if params.status is not None:
            query = query.where(DemoRecord.status == int(params.status))

        offset = page_offset(page_index, page_size)
        try:
            total = await self._db.scalar(
                select(func.count()).select_from(query.subquery()),
            )
            if not offset_in_range(offset):
                return total or 0, []
            result = await self._db.execute(
                query.order_by(DemoRecord.id.desc())
                .offset(offset)
                .limit(page_size),
            )
        except SQLAlchemyError as e:
            logger.error(f"Demo page query failed: {e}")
            raise InternalError("Failed to query demos", cause=e) from e
        return total or 0, [Demo.model_validate(r) for r in result.scalars().all()]

    async def get(self, record_id: RecordId) -> Demo | None:
        try:
            result = await self._db.execute(
                self._live().where(DemoRecord.record_id == record_id),
            )
        except SQLAlchemyError as e:
            logger.error(f"Demo lookup failed for {record_id}: {e}")
            raise InternalError("Failed to get demo", cause=e) from e
        row = result.scalar_one_or_none()
        return Demo.model_validate(row) if row else None

    async def check_code_exists(self, code: str) -> bool:
        return await self._exists(DemoRecord.code == code)

    async def check_exists(self, record_id: RecordId) -> bool:
        return await self._exists(DemoRecord.record_id == record_id)

    async def _exists(self, clause) -> bool:
        try:
            count = await self._db.scalar(
                select(func.count(DemoRecord.id))
                .where(DemoRecord.deleted == 0)
                .where(clause),
            )
        except SQLAlchemyError as e:
            logger.error(f"Demo existence check failed: {e}")
            raise InternalError("Failed to check demo", cause=e) from e
        return bool(count)

    async def create(self, item: Demo) -> None:
        """Insert item and write the storage-assigned id back onto it."""
        async with self._writing("create"):
            row = DemoRecord(**item.model_dump(exclude={"id"}))
            self._db.add(row)
            await self._db.flush()
            item.id = row.id

    async def update(self, record_id: RecordId, changes: dict[str, Any]) -> None:
        values = {**changes, "updated": int(time.time())}
        async with self._writing("update"):
            await self._db.execute(
                update(DemoRecord)
                .where(DemoRecord.record_id == record_id)
                .where(DemoRecord.deleted == 0)
                .values(**values),
            )

    async def delete(self, record_id: RecordId) -> None:
        async with self._writing("delete"):
            await self._db.execute(
                update(DemoRecord)
                .where(DemoRecord.record_id == record_id)
                .where(DemoRecord.deleted == 0)
                .values(deleted=int(time.time())),
            )

    @asynccontextmanager
    async def _writing(self, operation: str) -> AsyncIterator[None]:
        """Commit on success; roll back and translate SQLAlchemy errors on failure."""
        try:
            yield
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Demo {operation} violated a constraint: {e}")
            raise ConflictError(cause=e) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Demo {operation} failed: {e}")
            raise InternalError(f"Failed to {operation} demo", cause=e) from e
