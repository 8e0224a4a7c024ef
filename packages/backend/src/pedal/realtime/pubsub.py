"""Domain event publishing — services → live channel.

Learn: Publishing is fire-and-forget. If no one is connected, the event
is lost. That's fine for real-time UI updates (the frontend can always
query the API to catch up).

Events are handed to FastAPI's BackgroundTasks, so the broadcast runs
after the response is sent and a slow peer never delays the request
that caused the event.
"""

from typing import Any

from fastapi import BackgroundTasks

from pedal.realtime.broadcast import Broadcaster
from pedal.store.app_config import AppConfigStore


class EventPublisher:
    """Broadcasts domain events while the ``realtime`` feature flag is on."""

    def __init__(self, broadcaster: Broadcaster, config: AppConfigStore):
        self.broadcaster = broadcaster
        self.config = config

    def publish_event(
        self,
        tasks: BackgroundTasks,
        event_type: str,
        data: dict[str, Any],
    ) -> bool:
        """Schedule ``{"type": event_type, **data}`` for broadcast.

        Returns False when the realtime flag is off and nothing was sent.
        """
        if not self.config.feature_enabled("realtime"):
            return False
        tasks.add_task(self.broadcaster.broadcast, {"type": event_type, **data})
        return True
