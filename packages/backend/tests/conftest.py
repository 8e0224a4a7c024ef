"""Test fixtures — a fresh, isolated app per test.

Learn: All state lives on app.state (stores, registry, broadcaster), so
isolation is just "build a new app". Every app starts with the demo
data loaded: users ram, hanuma and dummy, posts p-1 and p-2, and the
seed follows (ram ↔ hanuma, dummy → both).

bcrypt's work factor is turned down before pedal is imported so
register/login tests stay fast.
"""

import os

os.environ.setdefault("PEDAL_BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from pedal.auth.dependencies import CurrentIdentity, get_current_user  # noqa: E402
from pedal.auth.jwt import issue_token  # noqa: E402
from pedal.main import create_app  # noqa: E402


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def stores(app):
    return app.state.stores


@pytest.fixture()
def auth_headers():
    """Build a real Bearer header for any existing, active user."""

    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {issue_token(user_id)}"}

    return _headers


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client with auth overridden — every request is user "ram".

    Learn: Overriding get_current_user means tests of protected routes
    don't need to register+login first. Tests that care *who* is
    calling pass real tokens to unauthenticated_client instead.
    """

    def override_get_current_user():
        return CurrentIdentity(user_id="ram")

    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await app.state.broadcaster.stop()


@pytest_asyncio.fixture()
async def unauthenticated_client(app):
    """HTTP client WITHOUT auth override — for testing real JWT flows."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await app.state.broadcaster.stop()
