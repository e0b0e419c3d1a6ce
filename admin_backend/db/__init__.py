"""Database Layer — declarative base and repository implementations.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never escape a repository unwrapped

Design Decisions:
    - Repositories take an AsyncSession per request (ADR: session lifetime = request lifetime)
"""
