"""Identity provider client tests - ordered host fallback over httpx.MockTransport.

Invariants:
    - The first host answering 2xx with a DID wins; later hosts are not called
    - Rejections, transport errors and unusable bodies fall through to the next host
    - All hosts failing -> None
"""

import httpx

from anchor_pds.infrastructure.identity_provider import (
    PdsSessionResolver, SessionEndpoint,
)

PRIMARY = "https://bsky.social"
SECONDARY = "https://staging.bsky.dev"
SESSION_PATH = "/xrpc/com.atproto.server.getSession"


def _resolver(handler) -> tuple[PdsSessionResolver, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return PdsSessionResolver(http, [PRIMARY, SECONDARY], timeout_seconds=1.0), seen


def _host(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}"


def test_session_endpoint_url():
    assert SessionEndpoint("https://bsky.social/").url == PRIMARY + SESSION_PATH


async def test_first_host_success_stops_fallback():
    resolver, seen = _resolver(
        lambda r: httpx.Response(200, json={"did": "did:plc:alice", "handle": "alice.bsky.social"}),
    )

    identity = await resolver.resolve("tok")

    assert identity.did == "did:plc:alice"
    assert identity.handle == "alice.bsky.social"
    assert [_host(r) for r in seen] == [PRIMARY]
    assert seen[0].url.path == SESSION_PATH
    assert seen[0].headers["Authorization"] == "Bearer tok"


async def test_rejection_falls_back_to_next_host():
    def handler(request):
        if _host(request) == PRIMARY:
            return httpx.Response(401, json={"error": "InvalidToken"})
        return httpx.Response(200, json={"did": "did:plc:staging"})

    resolver, seen = _resolver(handler)

    identity = await resolver.resolve("tok")

    assert identity.did == "did:plc:staging"
    assert identity.handle is None
    assert [_host(r) for r in seen] == [PRIMARY, SECONDARY]


async def test_transport_error_falls_back_to_next_host():
    def handler(request):
        if _host(request) == PRIMARY:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"did": "did:plc:staging"})

    resolver, _ = _resolver(handler)

    assert (await resolver.resolve("tok")).did == "did:plc:staging"


async def test_timeout_falls_back_to_next_host():
    def handler(request):
        if _host(request) == PRIMARY:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json={"did": "did:plc:staging"})

    resolver, _ = _resolver(handler)

    assert (await resolver.resolve("tok")).did == "did:plc:staging"


async def test_unusable_body_falls_back_to_next_host():
    def handler(request):
        if _host(request) == PRIMARY:
            return httpx.Response(200, text="<html>oops</html>")
        return httpx.Response(200, json={"handle": "no-did.example"})

    resolver, seen = _resolver(handler)

    assert await resolver.resolve("tok") is None
    assert len(seen) == 2


async def test_all_hosts_rejecting_returns_none():
    resolver, seen = _resolver(lambda r: httpx.Response(400, json={"error": "ExpiredToken"}))

    assert await resolver.resolve("tok") is None
    assert [_host(r) for r in seen] == [PRIMARY, SECONDARY]


async def test_non_string_handle_is_dropped():
    resolver, _ = _resolver(
        lambda r: httpx.Response(200, json={"did": "did:plc:alice", "handle": 42}),
    )

    identity = await resolver.resolve("tok")

    assert identity.did == "did:plc:alice"
    assert identity.handle is None
