"""Shared base for the in-memory stores.

Learn: Every store owns exactly one collection and exactly one
reader/writer lock. Reads share the lock, writes hold it exclusively.
readerwriterlock's locks are NOT reentrant, so a method holding the
lock must never call another locked method of the same store.

Rules every store follows:
- never hold the lock across I/O or an await
- never take a second store's lock while holding this one
- read-modify-write happens under one exclusive acquisition
- records leave the store as copies, never as shared references
"""

from readerwriterlock import rwlock


class LockedStore:
    """A single shared collection guarded by its own reader/writer lock."""

    def __init__(self) -> None:
        # Fair: neither readers nor writers can starve the other side
        self._lock = rwlock.RWLockFair()

    def _reading(self):
        return self._lock.gen_rlock()

    def _writing(self):
        return self._lock.gen_wlock()
