"""Settings API tests - per-caller feed-posting preference."""

GET = "/xrpc/app.dropanchor.getSettings"
UPDATE = "/xrpc/app.dropanchor.updateSettings"


async def test_defaults_for_new_user(client, alice_headers):
    response = await client.get(GET, headers=alice_headers)

    assert response.status_code == 200
    assert response.json() == {"enableFeedPosts": True}


async def test_update_then_read_back(client, alice_headers, bob_headers):
    response = await client.post(
        UPDATE, json={"enableFeedPosts": False}, headers=alice_headers,
    )
    assert response.json() == {"enableFeedPosts": False}

    assert (await client.get(GET, headers=alice_headers)).json() == {"enableFeedPosts": False}
    assert (await client.get(GET, headers=bob_headers)).json() == {"enableFeedPosts": True}


async def test_settings_require_auth(client):
    assert (await client.get(GET)).status_code == 401
    assert (await client.post(UPDATE, json={"enableFeedPosts": False})).status_code == 401
