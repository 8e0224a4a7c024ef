"""Demo data — the riders and posts a fresh server starts with."""

from datetime import timedelta

from pedal.store.models import utcnow

# Not a valid bcrypt hash: demo accounts exist but cannot log in.
DEMO_PASSWORD_HASH = "$2a$10$dummy.hash.for.demo.purposes.only"


def seed_demo_data(stores) -> None:
    """Load demo users, follows and posts into empty stores."""
    now = utcnow()

    for uid, name, email, img in (
        ("ram", "Ram", "ram@pedal.com", 12),
        ("hanuma", "Hanuma", "hanuma@pedal.com", 13),
        ("dummy", "Demo User", "demo@pedal.com", 14),
    ):
        stores.users.create(
            user_id=uid,
            name=name,
            email=email,
            password_hash=DEMO_PASSWORD_HASH,
            avatar=f"https://i.pravatar.cc/100?img={img}",
        )

    stores.follows.follow("ram", "hanuma")
    stores.follows.follow("hanuma", "ram")
    stores.follows.follow("dummy", "ram")
    stores.follows.follow("dummy", "hanuma")

    # Oldest first: the post store lists newest first
    stores.posts.create(
        post_id="p-1",
        author_id="ram",
        text="First ride of the season!",
        created_at=now - timedelta(hours=2),
        reactions={"hanuma": "like"},
    )
    stores.posts.create(
        post_id="p-2",
        author_id="hanuma",
        text="Trail condition looks perfect today.",
        created_at=now - timedelta(minutes=90),
        reactions={"ram": "like"},
    )
