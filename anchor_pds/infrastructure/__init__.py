"""Infrastructure Layer - external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External calls carry explicit timeouts and map failures locally

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
