"""Services Layer - imperative shell around the pure core.

Invariants:
    - Repositories own all SQL; callers pass an AsyncSession in
    - The identity cache is the only shared mutable in-process state

Design Decisions:
    - Repositories are plain classes satisfying core Protocols (structural typing)
"""
