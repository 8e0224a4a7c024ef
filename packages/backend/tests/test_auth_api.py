"""Auth tests.

Learn: Tests cover:
1. User registration + duplicate prevention
2. Login → JWT tokens (and why demo accounts can't log in)
3. Token refresh
4. Protected /auth/profile with real tokens
5. Deactivated accounts losing access
"""

import uuid

import pytest

from pedal.auth.jwt import create_access_token, create_refresh_token


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


async def _register(client, email: str, password: str = "secure_password_123"):
    return await client.post(
        "/api/auth/register",
        json={"email": email, "name": "Test User", "password": password},
    )


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(unauthenticated_client):
    """Register a new account — tokens and the public user come back."""
    email = _email("test")
    r = await _register(unauthenticated_client, email)
    assert r.status_code == 201
    data = r.json()
    assert data["token"]
    assert data["refreshToken"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == email
    assert data["user"]["name"] == "Test User"
    assert data["user"]["avatar"].startswith("https://ui-avatars.com/")
    assert "passwordHash" not in data["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(unauthenticated_client):
    """Can't register with the same email twice, in any case."""
    email = _email("dup")
    r1 = await _register(unauthenticated_client, email)
    assert r1.status_code == 201

    r2 = await _register(unauthenticated_client, email.upper())
    assert r2.status_code == 409


@pytest.mark.asyncio
async def test_register_seeded_email_conflicts(unauthenticated_client):
    r = await _register(unauthenticated_client, "ram@pedal.com")
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_register_short_password(unauthenticated_client):
    """Password must be at least 6 characters."""
    r = await _register(unauthenticated_client, _email("short"), password="abc")
    assert r.status_code == 422  # validation error


@pytest.mark.asyncio
async def test_register_invalid_email(unauthenticated_client):
    r = await _register(unauthenticated_client, "not-an-email")
    assert r.status_code == 422


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(unauthenticated_client):
    """Login with valid credentials returns tokens."""
    email = _email("login")
    await _register(unauthenticated_client, email)

    r = await unauthenticated_client.post(
        "/api/auth/login",
        json={"email": email, "password": "secure_password_123"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["token"]
    assert data["user"]["email"] == email


@pytest.mark.asyncio
async def test_login_wrong_password(unauthenticated_client):
    email = _email("wrong")
    await _register(unauthenticated_client, email)

    r = await unauthenticated_client.post(
        "/api/auth/login",
        json={"email": email, "password": "not_the_password"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_login_unknown_email(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/login",
        json={"email": _email("ghost"), "password": "whatever123"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_demo_user_cannot_log_in(unauthenticated_client):
    """Seeded accounts carry a placeholder hash that never verifies."""
    r = await unauthenticated_client.post(
        "/api/auth/login",
        json={"email": "ram@pedal.com", "password": "password"},
    )
    assert r.status_code == 401


# ═══════════════════════════════════════════════════════════
# Refresh / profile / logout
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_refresh_token(unauthenticated_client):
    """A refresh token buys a new token pair."""
    r = await _register(unauthenticated_client, _email("refresh"))
    refresh_token = r.json()["refreshToken"]

    r = await unauthenticated_client.post(
        "/api/auth/refresh", json={"refreshToken": refresh_token}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["token"]
    assert data["refreshToken"]


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/refresh", json={"refreshToken": create_access_token("ram")}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_refresh_rejects_garbage(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/refresh", json={"refreshToken": "not.a.jwt"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_profile_with_token(unauthenticated_client):
    """The token from register works against a protected route."""
    email = _email("me")
    token = (await _register(unauthenticated_client, email)).json()["token"]

    r = await unauthenticated_client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert r.status_code == 200
    assert r.json()["email"] == email
    assert r.json()["isActive"] is True


@pytest.mark.asyncio
async def test_profile_without_token(unauthenticated_client):
    r = await unauthenticated_client.get("/api/auth/profile")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token_is_not_an_access_token(unauthenticated_client):
    r = await unauthenticated_client.get(
        "/api/auth/profile",
        headers={"Authorization": f"Bearer {create_refresh_token('ram')}"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_token_for_unknown_user(unauthenticated_client, auth_headers):
    r = await unauthenticated_client.get(
        "/api/auth/profile", headers=auth_headers("nobody")
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_deactivated_user_loses_access(unauthenticated_client, stores):
    """Soft-deleted accounts can't use old tokens or log in again."""
    email = _email("gone")
    data = (await _register(unauthenticated_client, email)).json()
    stores.users.deactivate(data["user"]["id"])

    r = await unauthenticated_client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert r.status_code == 401

    r = await unauthenticated_client.post(
        "/api/auth/login",
        json={"email": email, "password": "secure_password_123"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_logout(unauthenticated_client, auth_headers):
    r = await unauthenticated_client.post("/api/auth/logout", headers=auth_headers("ram"))
    assert r.status_code == 200
    assert r.json()["message"] == "logged out successfully"
