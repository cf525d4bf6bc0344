"""Ledger HTTP API — auth, info, sendCoin, buy and health through the FastAPI app."""

import pytest


async def _login(client, username: str, password: str = "pw") -> dict[str, str]:
    response = await client.post(
        "/api/auth", json={"username": username, "password": password},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def test_auth_issues_token_for_new_user(client):
    response = await client.post(
        "/api/auth", json={"username": "alice", "password": "pw"},
    )
    assert response.status_code == 200
    assert response.json()["token"]


async def test_auth_wrong_password_is_unauthorized(client):
    await _login(client, "alice", "right")

    response = await client.post(
        "/api/auth", json={"username": "alice", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


async def test_auth_missing_password_is_validation_error(client):
    response = await client.post("/api/auth", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Token abc"},
    {"Authorization": "Bearer not-a-jwt"},
])
async def test_info_requires_valid_bearer_token(client, headers):
    response = await client.get("/api/info", headers=headers)
    assert response.status_code == 401


async def test_new_account_info_shape(client):
    headers = await _login(client, "alice")

    response = await client.get("/api/info", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "coins": 1000,
        "inventory": [],
        "coinHistory": {"received": [], "sent": []},
    }


async def test_buy_then_info_lists_item(client):
    headers = await _login(client, "alice")

    response = await client.get("/api/buy/t-shirt", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"status": "item was successfully purchased"}

    info = (await client.get("/api/info", headers=headers)).json()
    assert info["coins"] == 920
    assert info["inventory"] == [{"type": "t-shirt", "quantity": 1}]


async def test_buy_unknown_item_is_bad_request(client):
    headers = await _login(client, "alice")

    response = await client.get("/api/buy/unknown-item", headers=headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "ITEM_NOT_FOUND"
    assert error["message"] == "item not found"


async def test_buy_unaffordable_item_is_bad_request(client):
    headers = await _login(client, "alice")
    await client.get("/api/buy/pink-hoody", headers=headers)
    await client.get("/api/buy/pink-hoody", headers=headers)

    response = await client.get("/api/buy/t-shirt", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INSUFFICIENT_BALANCE"


async def test_send_coin_updates_both_histories(client):
    alice = await _login(client, "alice")
    bob = await _login(client, "bob")

    response = await client.post(
        "/api/sendCoin", json={"toUser": "bob", "amount": 100}, headers=alice,
    )
    assert response.status_code == 200
    assert response.json() == {"status": "coins were successfully sent to the user"}

    alice_info = (await client.get("/api/info", headers=alice)).json()
    bob_info = (await client.get("/api/info", headers=bob)).json()
    assert alice_info["coins"] == 900
    assert alice_info["coinHistory"]["sent"] == [{"toUser": "bob", "amount": 100}]
    assert bob_info["coins"] == 1100
    assert bob_info["coinHistory"]["received"] == [
        {"fromUser": "alice", "amount": 100},
    ]


async def test_send_coin_to_self_is_bad_request(client):
    headers = await _login(client, "alice")

    response = await client.post(
        "/api/sendCoin", json={"toUser": "alice", "amount": 10}, headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SELF_TRANSFER"


async def test_send_coin_unknown_recipient_is_bad_request(client):
    headers = await _login(client, "alice")

    response = await client.post(
        "/api/sendCoin", json={"toUser": "nobody", "amount": 10}, headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "RECIPIENT_NOT_FOUND"


@pytest.mark.parametrize("amount", [0, -5, "10", 1.5])
async def test_send_coin_rejects_bad_amounts(client, amount):
    headers = await _login(client, "alice")
    await _login(client, "bob")

    response = await client.post(
        "/api/sendCoin", json={"toUser": "bob", "amount": amount}, headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_health_endpoints(client):
    assert (await client.get("/api/health/")).status_code == 200

    response = await client.get("/api/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"
