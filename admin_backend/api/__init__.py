"""API Layer — FastAPI routes, request context and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints answer through RequestContext with a JSON envelope

Design Decisions:
    - Thin routes delegate to services; the context owns input access and output shaping
"""
