"""Live counters for the stats and admin endpoints.

Learn: Each count takes and releases its own store's lock before the
next one is read. The numbers are therefore not one atomic snapshot —
a post created between two reads may show up in one counter and not
another — which is fine for a dashboard and avoids ever holding
several locks at once.
"""

from datetime import datetime, time, timezone

from pedal.realtime.registry import ConnectionRegistry
from pedal.store import Stores


def _start_of_today() -> datetime:
    now = datetime.now(timezone.utc)
    return datetime.combine(now.date(), time.min, tzinfo=timezone.utc)


def live_stats(stores: Stores, registry: ConnectionRegistry) -> dict:
    return {
        "timestamp": datetime.now(timezone.utc),
        "users": {
            "total": stores.users.count(),
            "active": stores.users.count_active(),
            "online": registry.count(),
        },
        "posts": {
            "total": stores.posts.count(),
            "today": stores.posts.count_since(_start_of_today()),
        },
        "comments": {"total": stores.comments.count()},
        "messages": {"total": stores.messages.count()},
    }


def entity_counts(stores: Stores) -> dict:
    return {
        "messages_count": stores.messages.count(),
        "users_count": stores.users.count(),
        "posts_count": stores.posts.count(),
    }
