"""getRecord API tests - public lookup by AT URI."""

import pytest

from anchor_pds.core.checkin_record import CheckinRecord
from anchor_pds.services.checkin_store import SqlCheckinRepository

GET = "/xrpc/com.atproto.sync.getRecord"
URI = "at://did:plc:alice/app.dropanchor.checkin/test-rkey-123"


async def _seed(test_session_factory, cid="baf123abc456"):
    async with test_session_factory() as session:
        await SqlCheckinRepository(session).create(
            "test-rkey-123",
            "did:plc:alice",
            CheckinRecord(text="Coffee", created_at="2025-06-15T13:00:00Z"),
            URI,
            cid,
        )


async def test_get_record_is_public(client, test_session_factory):
    await _seed(test_session_factory)

    response = await client.get(GET, params={"uri": URI})

    assert response.status_code == 200
    assert response.json() == {
        "uri": URI,
        "cid": "baf123abc456",
        "value": {"text": "Coffee", "createdAt": "2025-06-15T13:00:00Z"},
    }


async def test_missing_cid_is_omitted(client, test_session_factory):
    await _seed(test_session_factory, cid=None)

    response = await client.get(GET, params={"uri": URI})

    assert "cid" not in response.json()


async def test_unknown_uri_is_404(client):
    response = await client.get(GET, params={"uri": URI})

    assert response.status_code == 404
    assert response.json() == {"error": "RecordNotFound", "message": "Record not found"}


async def test_missing_uri_is_400(client):
    response = await client.get(GET)

    assert response.status_code == 400
    assert response.json() == {
        "error": "InvalidRequest", "message": "uri parameter required",
    }


@pytest.mark.parametrize("uri", [
    "https://example.com/x",
    "at://did:plc:x/app.dropanchor.checkin",
])
async def test_malformed_uri_is_not_found(client, uri):
    response = await client.get(GET, params={"uri": uri})

    assert response.status_code == 404
    assert response.json()["error"] == "RecordNotFound"
