"""Identity Provider Client - resolves bearer tokens via PDS session endpoints.

Invariants:
    - Hosts are tried in the configured order; the FIRST 2xx answer with a DID wins
    - A rejection (non-2xx), transport failure, timeout or malformed body on one host
      moves on to the next host; it never fails the whole resolution
    - No host accepting the token -> None (caller maps to AuthenticationRequired)
    - The token is never decoded or verified locally: trust is delegated entirely
      to the provider's getSession endpoint

Design Decisions:
    - Shared httpx.AsyncClient injected by the lifespan: one connection pool per
      process, closed on shutdown
    - Explicit per-request timeout: a hung host costs at most timeout_seconds
    - Each host is a SessionEndpoint so the fallback order is plain data and can be
      tested host by host
"""

import logging
from dataclasses import dataclass

import httpx

from anchor_pds.core.domain_types import SESSION_LOOKUP_METHOD, Did
from anchor_pds.core.repository_protocols import Identity
from anchor_pds.infrastructure.observability import token_preview

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionEndpoint:
    """One identity provider host and its session lookup URL."""
    host: str

    @property
    def url(self) -> str:
        return f"{self.host.rstrip('/')}/xrpc/{SESSION_LOOKUP_METHOD}"


class PdsSessionResolver:
    """Resolves tokens against an ordered list of identity provider hosts."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        hosts: list[str],
        timeout_seconds: float = 10.0,
    ):
        self.http = http
        self.endpoints = [SessionEndpoint(host) for host in hosts]
        self.timeout_seconds = timeout_seconds

    async def resolve(self, token: str) -> Identity | None:
        """Try each host in order; stop at the first that accepts the token."""
        for endpoint in self.endpoints:
            identity = await self._lookup(endpoint, token)
            if identity is not None:
                return identity
        logger.warning(
            f"Token rejected by all identity providers: {token_preview(token)}",
        )
        return None

    async def _lookup(
        self, endpoint: SessionEndpoint, token: str,
    ) -> Identity | None:
        """Single host attempt. Any failure is logged and reported as None."""
        try:
            response = await self.http.get(
                endpoint.url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.warning(
                f"Identity provider unreachable: {e!r}",
                extra={"host": endpoint.host},
            )
            return None

        if not response.is_success:
            logger.info(
                "Identity provider rejected token",
                extra={"host": endpoint.host, "status_code": response.status_code},
            )
            return None

        return _identity_from_session(response, endpoint.host)


def _identity_from_session(
    response: httpx.Response, host: str,
) -> Identity | None:
    """Extract {did, handle?} from a getSession body. None if unusable."""
    try:
        session = response.json()
    except ValueError:
        logger.warning("Identity provider sent non-JSON session", extra={"host": host})
        return None
    did = session.get("did") if isinstance(session, dict) else None
    if not isinstance(did, str) or not did:
        logger.warning("Identity provider session has no DID", extra={"host": host})
        return None
    handle = session.get("handle")
    identity = Identity(
        did=Did(did), handle=handle if isinstance(handle, str) else None,
    )
    logger.info("Token resolved", extra={"host": host, "did": identity.did})
    return identity
