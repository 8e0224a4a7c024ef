"""Broadcast fan-out — best-effort delivery to every connected client.

Learn: Delivery is fire-and-forget. The flow for one broadcast:

1. Serialize the payload once (no lock held).
2. Snapshot the registry (read lock, released immediately).
3. Write to every peer concurrently, each bounded by a send timeout,
   so one slow or dead peer never stalls the others.
4. Every failed peer goes onto a cleanup queue. A single remover task
   drains it: unregister (write lock) + close the dead connection.

The caller never sees a delivery error. Removal happens off the
broadcast path, and never while the registry's read lock is held.
"""

import asyncio
import json
from typing import Any, Optional

import structlog

from pedal.realtime.registry import Connection, ConnectionRegistry

logger = structlog.get_logger()


class Broadcaster:
    """Fans messages out to a ConnectionRegistry and prunes dead peers.

    Usage:
        broadcaster = Broadcaster(registry)
        await broadcaster.start()   # optional, broadcast() starts lazily
        await broadcaster.broadcast({"type": "ping"})
        await broadcaster.stop()
    """

    def __init__(self, registry: ConnectionRegistry, send_timeout: float = 5.0):
        self.registry = registry
        self.send_timeout = send_timeout
        self._failed: Optional[asyncio.Queue] = None
        self._remover: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._remover is not None and not self._remover.done()

    async def start(self) -> None:
        """Start the remover task (idempotent)."""
        if self.running:
            return
        self._failed = asyncio.Queue()
        self._remover = asyncio.create_task(self._remove_loop())
        logger.info("broadcast.remover_started")

    async def stop(self) -> None:
        """Stop the remover task. Queued removals that never ran are dropped."""
        if self._remover is None:
            return
        self._remover.cancel()
        try:
            await self._remover
        except asyncio.CancelledError:
            pass
        self._remover = None
        self._failed = None
        logger.info("broadcast.remover_stopped")

    async def broadcast(self, message: dict[str, Any]) -> int:
        """Deliver ``message`` to every registered connection.

        Returns how many peers it reached. Never raises for delivery
        failures — failed peers are queued for removal instead.
        """
        await self.start()
        try:
            payload = json.dumps(message, default=str)
        except (TypeError, ValueError) as e:
            logger.warning("broadcast.unserializable", error=str(e))
            return 0

        peers = self.registry.snapshot()
        if not peers:
            return 0

        failed = self._failed
        results = await asyncio.gather(
            *(
                self._deliver(identity, conn, payload, failed)
                for identity, conn in peers
            )
        )
        delivered = sum(results)
        logger.debug("broadcast.sent", peers=len(peers), delivered=delivered)
        return delivered

    async def settle(self) -> None:
        """Wait until every queued removal has been processed."""
        if self._failed is not None:
            await self._failed.join()

    async def _deliver(
        self,
        identity: str,
        conn: Connection,
        payload: str,
        failed: asyncio.Queue,
    ) -> int:
        try:
            await asyncio.wait_for(conn.send_text(payload), timeout=self.send_timeout)
            return 1
        except Exception as e:
            # Any peer failure (closed socket, timeout, transport error) is contained here
            logger.warning(
                "broadcast.delivery_failed",
                identity=identity,
                error=repr(e),
            )
            failed.put_nowait((identity, conn))
            return 0

    async def _remove_loop(self) -> None:
        queue = self._failed
        while True:
            identity, conn = await queue.get()
            try:
                if self.registry.unregister(identity, conn):
                    logger.info(
                        "registry.pruned",
                        identity=identity,
                        online=self.registry.count(),
                    )
                await close_quietly(
                    conn,
                    code=1011,
                    reason="delivery failed",
                    timeout=self.send_timeout,
                )
            finally:
                queue.task_done()


async def close_quietly(
    conn: Connection,
    code: int = 1000,
    reason: Optional[str] = None,
    timeout: float = 5.0,
) -> None:
    """Close a connection that may already be dead."""
    try:
        await asyncio.wait_for(conn.close(code=code, reason=reason), timeout=timeout)
    except Exception as e:
        logger.debug("connection.close_failed", error=repr(e))
