#!/usr/bin/env python3
"""
PEDAL Quickstart — two riders, one follow, a post and its reactions.

Registers Alice and Bob → Alice follows Bob → Bob posts → Alice reacts
and comments → Alice reads her feed → live stats.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:8080
"""

from _common import check_backend, create_client


def main():
    check_backend()

    # ── Riders ────────────────────────────────────────────────────
    print("\n1. Registering riders...")
    alice, alice_user = create_client("Alice")
    bob, bob_user = create_client("Bob")

    # ── Follow ────────────────────────────────────────────────────
    print("\n2. Alice follows Bob...")
    resp = alice.post(f"/users/{bob_user['id']}/follow")
    assert resp.status_code == 200, f"Failed: {resp.text}"
    following = alice.get(f"/users/{alice_user['id']}/following").json()
    print(f"   Alice follows {following['count']} rider(s)")

    # ── Post ──────────────────────────────────────────────────────
    print("\n3. Bob posts...")
    resp = bob.post("/social/posts", json={"text": "Century ride done — 100 miles!"})
    assert resp.status_code == 201, f"Failed: {resp.text}"
    post = resp.json()
    print(f"   Post: {post['id']} — {post['text']}")

    # ── React + comment ───────────────────────────────────────────
    print("\n4. Alice reacts and comments...")
    resp = alice.post(f"/social/posts/{post['id']}/react", json={"type": "fire"})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    print(f"   Reactions: {resp.json()['reactions']}")

    resp = alice.post(
        f"/social/posts/{post['id']}/comments", json={"text": "Legendary. Same route next week?"}
    )
    assert resp.status_code == 201, f"Failed: {resp.text}"
    comments = alice.get(f"/social/posts/{post['id']}/comments").json()
    print(f"   Comments: {len(comments)}")

    # ── Feed ──────────────────────────────────────────────────────
    print("\n5. Alice's feed:")
    feed = alice.get("/social/feed").json()
    for p in feed:
        print(f"   {p['authorId']:>24s}: {p['text']}")

    # ── Stats ─────────────────────────────────────────────────────
    print("\n6. Live stats:")
    stats = alice.get("/stats/live").json()
    print(f"   Users:    {stats['users']['total']} ({stats['users']['online']} online)")
    print(f"   Posts:    {stats['posts']['total']} ({stats['posts']['today']} today)")
    print(f"   Comments: {stats['comments']['total']}")

    print("\nDone.")


if __name__ == "__main__":
    main()
