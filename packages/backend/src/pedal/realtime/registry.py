"""Connection registry — who is connected right now.

Learn: Maps a client identity to its open duplex connection. The
registry never performs I/O itself: registering, unregistering and
snapshotting are pure dict operations under a reader/writer lock, so
a slow peer can never hold the lock hostage. Whoever does the I/O
(broadcast, the WebSocket handler) works on a snapshot copy.
"""

from typing import Optional, Protocol

from pedal.store.base import LockedStore


class Connection(Protocol):
    """What the registry and broadcaster need from a connection.

    Starlette's WebSocket satisfies this; tests use small fakes.
    """

    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None: ...


class ConnectionRegistry(LockedStore):
    """identity → connection, one live connection per identity."""

    def __init__(self) -> None:
        super().__init__()
        self._clients: dict[str, Connection] = {}

    def register(self, identity: str, connection: Connection) -> Optional[Connection]:
        """Insert or replace the entry for ``identity``.

        Returns the superseded connection, if any, so the caller can
        close it outside the lock.
        """
        with self._writing():
            previous = self._clients.get(identity)
            self._clients[identity] = connection
        if previous is connection:
            return None
        return previous

    def unregister(self, identity: str, connection: Optional[Connection] = None) -> bool:
        """Remove the entry for ``identity``; no-op if absent.

        With ``connection`` given, only removes the entry while it still
        points at that connection — a closing session must not evict the
        session that replaced it.
        """
        with self._writing():
            current = self._clients.get(identity)
            if current is None:
                return False
            if connection is not None and current is not connection:
                return False
            del self._clients[identity]
            return True

    def snapshot(self) -> list[tuple[str, Connection]]:
        with self._reading():
            return list(self._clients.items())

    def get(self, identity: str) -> Optional[Connection]:
        with self._reading():
            return self._clients.get(identity)

    def count(self) -> int:
        with self._reading():
            return len(self._clients)
