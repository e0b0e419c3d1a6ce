"""Infrastructure Layer — database sessions, tracing and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Database failures escaping a session are mapped to core errors

Design Decisions:
    - One module per cross-cutting concern
"""
