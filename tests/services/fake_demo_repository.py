"""In-memory DemoRepository for service tests.

Invariants:
    - Satisfies core.repository_protocols.DemoRepository structurally
    - Assigns increasing integer ids like an autoincrement column
    - Soft delete only stamps `deleted`; rows are never removed
    - Every call is appended to `calls` as (method, args) for assertions
"""

import time
from typing import Any

from admin_backend.schemas.demo import Demo, DemoQueryParams


class FakeDemoRepository:
    def __init__(self):
        self.rows: dict[str, Demo] = {}
        self.calls: list[tuple[str, tuple]] = []
        self._next_id = 1

    def _live(self) -> list[Demo]:
        return [r for r in self.rows.values() if r.deleted == 0]

    def methods_called(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def query_page(
        self, params: DemoQueryParams, page_index: int, page_size: int,
    ) -> tuple[int, list[Demo]]:
        self.calls.append(("query_page", (params, page_index, page_size)))
        rows = self._live()
        start = (page_index - 1) * page_size
        return len(rows), [r.model_copy() for r in rows[start:start + page_size]]

    async def get(self, record_id: str) -> Demo | None:
        self.calls.append(("get", (record_id,)))
        row = self.rows.get(record_id)
        if row is None or row.deleted:
            return None
        return row.model_copy()

    async def check_code_exists(self, code: str) -> bool:
        self.calls.append(("check_code_exists", (code,)))
        return any(r.code == code for r in self._live())

    async def check_exists(self, record_id: str) -> bool:
        self.calls.append(("check_exists", (record_id,)))
        return any(r.record_id == record_id for r in self._live())

    async def create(self, item: Demo) -> None:
        self.calls.append(("create", (item,)))
        item.id = self._next_id
        self._next_id += 1
        self.rows[item.record_id] = item.model_copy()

    async def update(self, record_id: str, changes: dict[str, Any]) -> None:
        self.calls.append(("update", (record_id, changes)))
        row = self.rows[record_id]
        self.rows[record_id] = row.model_copy(
            update={**changes, "updated": int(time.time())},
        )

    async def delete(self, record_id: str) -> None:
        self.calls.append(("delete", (record_id,)))
        self.rows[record_id].deleted = int(time.time())
