"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId is the externally visible identifier; never the storage id
    - All valid statuses encoded as Enums — no raw integer matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for status: the wire and the column both carry small integers
"""

from enum import IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", str)
UserId = NewType("UserId", str)
TraceId = NewType("TraceId", str)


# ─── Enums ───────────────────────────────────────────────────────

class DemoStatus(IntEnum):
    """Demo record lifecycle state — maps to DB `status` column."""
    ENABLED = 1
    DISABLED = 2


# Fields an update request may never write
PROTECTED_FIELDS: frozenset[str] = frozenset({
    "id", "record_id", "creator", "created", "updated", "deleted",
})
