"""Services Layer — business rules over the repository protocols.

Invariants:
    - Services depend on core/ Protocols, never on db/ implementations
    - Business failures raised as AdminError subclasses

Design Decisions:
    - One service class per entity, repository injected through the constructor
"""
