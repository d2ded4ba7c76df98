"""Route Modules - one file per XRPC namespace/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to core/services)
    - xrpc_fallback is registered LAST so it only sees unserved methods

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
