"""DemoRecord ORM — persists the representative admin entity.

Invariants:
    - id is an integer primary key assigned by storage
    - record_id is the external identifier (uuid4 string), unique across all rows
    - code is unique among live rows (deleted == 0) via a partial unique index
    - deleted == 0 means live; a soft delete stores the deletion time (Unix seconds)

Design Decisions:
    - Unix-second integers over DateTime: the wire format is integers (ADR: no tz conversion at the edge)
    - Partial index instead of a plain unique constraint: a soft-deleted code may be reused
"""

from sqlalchemy import BigInteger, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from admin_backend.db.base import Base


class DemoRecord(Base):
    """Demo record row."""
    __tablename__ = "demos"
    __table_args__ = (
        Index(
            "uq_demos_code_live", "code", unique=True,
            sqlite_where=text("deleted = 0"),
            postgresql_where=text("deleted = 0"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(
        String(36), nullable=False, unique=True,
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    memo: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    creator: Mapped[str] = mapped_column(String(36), nullable=False, default="")
    created: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    deleted: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, index=True,
    )
