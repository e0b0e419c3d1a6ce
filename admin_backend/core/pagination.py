"""Pagination — derives page index and page size from raw query strings.

Invariants:
    - page index is always >= 1 (default 1)
    - page size is always within [1, MAX_PAGE_SIZE] (default DEFAULT_PAGE_SIZE)
    - Only plain ASCII digit strings that fit in 64 unsigned bits parse;
      signs, spaces, decimals and overflow fall back to the default
    - An offset past MAX_ROW_OFFSET addresses no rows

Design Decisions:
    - Pure functions over raw strings: the request context owns query access,
      this module owns the rules (ADR: functional core)
"""

DEFAULT_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

MAX_UINT64 = 2**64 - 1
# Largest OFFSET a signed 64-bit storage integer can carry
MAX_ROW_OFFSET = 2**63 - 1


def _parse_positive(raw: str | None) -> int:
    """Parse an unsigned 64-bit decimal string. Returns 0 when unparsable."""
    if not raw or not (raw.isascii() and raw.isdigit()):
        return 0
    value = int(raw)
    return value if value <= MAX_UINT64 else 0


def parse_page_index(raw: str | None) -> int:
    value = _parse_positive(raw)
    return value if value > 0 else DEFAULT_PAGE_INDEX


def parse_page_size(raw: str | None) -> int:
    value = _parse_positive(raw)
    if value <= 0:
        return DEFAULT_PAGE_SIZE
    return min(value, MAX_PAGE_SIZE)


def page_offset(page_index: int, page_size: int) -> int:
    """Row offset of the first item on a 1-based page."""
    return (max(page_index, 1) - 1) * page_size


def offset_in_range(offset: int) -> bool:
    return 0 <= offset <= MAX_ROW_OFFSET
