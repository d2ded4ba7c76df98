"""API Layer - FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return XRPC-shaped JSON, errors included

Design Decisions:
    - Thin routes delegate to core validators and service repositories
"""
