"""
Shared helpers for PEDAL examples.

Handles the health check and authentication (register + login) so
each example can focus on its specific workflow.
"""

import sys
import uuid

import httpx

BASE = "http://localhost:8080/api"


def check_backend() -> None:
    """Verify the backend is reachable and print dependency status."""
    try:
        resp = httpx.get(f"{BASE}/health", timeout=5)
    except httpx.ConnectError:
        print(f"ERROR: Backend not reachable at {BASE}")
        print("Start it with:  pedal serve --reload")
        sys.exit(1)

    if resp.status_code != 200:
        print(f"ERROR: Health check returned {resp.status_code}")
        sys.exit(1)

    health = resp.json()
    print(f"Backend health: {health['status']} (v{health['version']})")
    print(f"  Postgres: {health['db']}")
    print(f"  Redis:    {health['redis']}")


def authenticate(name: str = "Demo Rider") -> tuple[str, dict]:
    """Register a fresh rider and login, returning (token, user).

    Uses a unique email per run so examples are idempotent.
    """
    run_id = uuid.uuid4().hex[:8]
    email = f"rider-{run_id}@example.com"
    password = "demo-password-123"

    resp = httpx.post(
        f"{BASE}/auth/register",
        json={"email": email, "name": f"{name} {run_id}", "password": password},
        timeout=10,
    )
    if resp.status_code != 201:
        print(f"ERROR: Registration failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    resp = httpx.post(
        f"{BASE}/auth/login",
        json={"email": email, "password": password},
        timeout=10,
    )
    if resp.status_code != 200:
        print(f"ERROR: Login failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    data = resp.json()
    return data["token"], data["user"]


def create_client(name: str = "Demo Rider") -> tuple[httpx.Client, dict]:
    """Authenticate and return an httpx Client with auth headers, plus the user."""
    token, user = authenticate(name)
    print(f"  Auth:     ✓ {user['name']} ({user['id']})")
    client = httpx.Client(
        base_url=BASE,
        timeout=10,
        headers={"Authorization": f"Bearer {token}"},
    )
    return client, user
