"""Identity Cache - memoizes token -> identity resolutions with a fixed TTL.

Invariants:
    - An entry is served only while clock() < expires_at; expired entries are
      evicted on lookup and re-resolved, never returned
    - Only successful resolutions are cached (no negative caching)
    - The lock guards the map only and is never held across an await; concurrent
      misses for one token may each call the resolver (last writer wins, all
      writers store the same identity)

Design Decisions:
    - Explicitly owned component (built in lifespan, stored on app.state) instead
      of a module-level dict: tests inject a fake resolver and a fake clock
    - Wall clock (time.time) by default: TTL is "one hour from resolution"
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from anchor_pds.core.repository_protocols import Identity, IdentityResolver
from anchor_pds.infrastructure.observability import token_preview

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


@dataclass(frozen=True)
class IdentityCacheEntry:
    identity: Identity
    expires_at: float


class IdentityCache:
    """Token-keyed cache in front of an IdentityResolver."""

    def __init__(
        self,
        resolver: IdentityResolver,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.resolver = resolver
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, IdentityCacheEntry] = {}
        self._lock = threading.Lock()

    async def resolve(self, token: str) -> Identity | None:
        """Cached identity for token, or a fresh resolution. None = unauthenticated."""
        cached = self.get(token)
        if cached is not None:
            return cached

        self.purge_expired()
        identity = await self.resolver.resolve(token)
        if identity is None:
            return None
        self.put(token, identity)
        return identity

    def get(self, token: str) -> Identity | None:
        now = self.clock()
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if now >= entry.expires_at:
                del self._entries[token]
                logger.debug(f"Identity cache entry expired: {token_preview(token)}")
                return None
            return entry.identity

    def put(self, token: str, identity: Identity) -> None:
        entry = IdentityCacheEntry(identity, self.clock() + self.ttl_seconds)
        with self._lock:
            self._entries[token] = entry

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self.clock()
        with self._lock:
            stale = [t for t, e in self._entries.items() if now >= e.expires_at]
            for token in stale:
                del self._entries[token]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
