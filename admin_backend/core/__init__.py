"""Core Layer — domain types, errors, pagination rules and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: everything here is pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
