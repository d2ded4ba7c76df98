"""Pydantic Schemas - request/response contracts for XRPC endpoints.

Invariants:
    - Schemas validate envelope shape only; record bodies stay untyped until the
      check-in validator sees them (first-failing-rule messages)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
