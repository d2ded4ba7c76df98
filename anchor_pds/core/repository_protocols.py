"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - IdentityResolver is a Protocol so the identity cache can be tested with a
      fake resolver and a fake clock (no network, no sleeping)
"""

from dataclasses import dataclass
from typing import Protocol

from anchor_pds.core.checkin_record import CheckinRecord, StoredCheckin
from anchor_pds.core.domain_types import AtUri, Cid, Did, RecordKey


@dataclass(frozen=True)
class Identity:
    """Resolved caller identity: DID plus optional display handle."""
    did: Did
    handle: str | None = None


@dataclass(frozen=True)
class UserSettings:
    """Per-DID preferences. Defaults apply when nothing is stored."""
    did: Did
    enable_feed_posts: bool = True


class IdentityResolver(Protocol):
    """Contract for token -> identity lookups against identity providers."""
    async def resolve(self, token: str) -> Identity | None: ...


class CheckinRepository(Protocol):
    """Contract for check-in persistence - implemented by shell."""
    async def create(
        self, rkey: RecordKey, author_did: Did, record: CheckinRecord,
        uri: AtUri, cid: Cid,
    ) -> None: ...
    async def get_by_uri(self, uri: str) -> StoredCheckin | None: ...
    async def list_by_author(
        self, author_did: str, limit: int, cursor: str | None = None,
    ) -> list[StoredCheckin]: ...
    async def list_global(
        self, limit: int, cursor: str | None = None,
    ) -> list[StoredCheckin]: ...


class UserSettingsRepository(Protocol):
    """Contract for per-user settings persistence - implemented by shell."""
    async def get(self, did: Did) -> UserSettings: ...
    async def update(self, settings: UserSettings) -> None: ...
