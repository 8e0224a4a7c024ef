"""Users API tests — profiles, directory, search, follow graph."""

import pytest


@pytest.mark.asyncio
async def test_get_me(client):
    r = await client.get("/api/users/me")
    assert r.status_code == 200
    me = r.json()
    assert me["id"] == "ram"
    assert me["email"] == "ram@pedal.com"
    assert me["avatar"] == "https://i.pravatar.cc/100?img=12"
    assert "passwordHash" not in me


@pytest.mark.asyncio
async def test_update_me_partial(client):
    r = await client.put("/api/users/me", json={"name": "Ram P."})
    assert r.status_code == 200
    assert r.json()["name"] == "Ram P."
    assert r.json()["avatar"] == "https://i.pravatar.cc/100?img=12"


@pytest.mark.asyncio
async def test_list_users(client):
    r = await client.get("/api/users")
    assert r.status_code == 200
    assert {u["id"] for u in r.json()} == {"ram", "hanuma", "dummy"}


@pytest.mark.asyncio
async def test_list_users_hides_inactive(client, stores):
    stores.users.deactivate("dummy")
    ids = {u["id"] for u in (await client.get("/api/users")).json()}
    assert ids == {"ram", "hanuma"}
    assert (await client.get("/api/users/dummy")).status_code == 404


@pytest.mark.asyncio
async def test_get_user(client):
    r = await client.get("/api/users/hanuma")
    assert r.status_code == 200
    assert r.json()["name"] == "Hanuma"
    assert (await client.get("/api/users/nobody")).status_code == 404


@pytest.mark.asyncio
async def test_search_by_name_and_email(client):
    r = await client.get("/api/users/search", params={"q": "HANU"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 1
    assert data["users"][0]["id"] == "hanuma"

    r = await client.get("/api/users/search", params={"q": "demo@"})
    assert [u["id"] for u in r.json()["users"]] == ["dummy"]


@pytest.mark.asyncio
async def test_search_limit(client):
    r = await client.get("/api/users/search", params={"q": "pedal", "limit": 2})
    assert r.json()["count"] == 2

    # Out of range → default limit, not an error
    r = await client.get("/api/users/search", params={"q": "pedal", "limit": 0})
    assert r.status_code == 200
    assert r.json()["count"] == 3


@pytest.mark.asyncio
async def test_following_and_followers(client):
    r = await client.get("/api/users/ram/following")
    assert r.json() == {"users": ["hanuma"], "count": 1}

    r = await client.get("/api/users/ram/followers")
    assert r.json() == {"users": ["dummy", "hanuma"], "count": 2}

    assert (await client.get("/api/users/nobody/followers")).status_code == 404


@pytest.mark.asyncio
async def test_follow_unknown_user(client):
    r = await client.post("/api/users/nobody/follow")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_follow_then_listed(client):
    r = await client.post("/api/users/dummy/follow")
    assert r.status_code == 200
    r = await client.get("/api/users/dummy/followers")
    assert r.json()["users"] == ["ram"]


@pytest.mark.asyncio
async def test_unfollow_is_idempotent(client):
    assert (await client.delete("/api/users/dummy/follow")).status_code == 200
    assert (await client.delete("/api/users/hanuma/follow")).status_code == 200
    assert (await client.get("/api/users/ram/following")).json()["count"] == 0


@pytest.mark.asyncio
async def test_follow_requires_auth(unauthenticated_client):
    r = await unauthenticated_client.post("/api/users/ram/follow")
    assert r.status_code == 401
