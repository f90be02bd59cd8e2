"""In-memory failed-login tracker.

Process-local and lost on restart. Tracks consecutive failures per identity
(the normalised email). Owns no policy: the login flow decides what a count
means.
"""
import os
import threading
import time
from contextlib import contextmanager

# Seconds after the last failure before a counter is forgotten. 0 = never.
FAILURE_WINDOW_SECONDS = int(os.environ.get("LOGIN_FAILURE_WINDOW_SECONDS", "0") or 0)


class _Entry:
    __slots__ = ("count", "last_failure")

    def __init__(self):
        self.count = 0
        self.last_failure = 0.0


class AttemptTracker:
    """Identity -> consecutive failure count, with per-identity locks."""

    def __init__(self, window_seconds: int | None = None):
        self._window = FAILURE_WINDOW_SECONDS if window_seconds is None else window_seconds
        self._entries: dict[str, _Entry] = {}
        # identity -> [lock, holders and waiters]
        self._identity_locks: dict[str, list] = {}
        self._lock = threading.Lock()

    @property
    def window_seconds(self) -> int:
        return self._window

    def get_failure_count(self, identity: str) -> int:
        """Stored count, or 0. Registers the identity at 0 when absent."""
        with self._lock:
            return self._entry(identity).count

    def record_failure(self, identity: str) -> int:
        """Increment by one and return the new count."""
        with self._lock:
            entry = self._entry(identity)
            entry.count += 1
            entry.last_failure = time.time()
            return entry.count

    # Single atomic step for callers not holding lock(identity).
    record_failure_and_check = record_failure

    def clear(self, identity: str) -> None:
        """Forget the identity entirely."""
        with self._lock:
            self._entries.pop(identity, None)

    def reset(self) -> None:
        """Drop all counters. Identity locks go away with their last holder."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @contextmanager
    def lock(self, identity: str):
        """Serialise a read-check-write sequence for one identity."""
        with self._lock:
            slot = self._identity_locks.get(identity)
            if slot is None:
                slot = [threading.Lock(), 0]
                self._identity_locks[identity] = slot
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._lock:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._identity_locks[identity]

    def _entry(self, identity: str) -> _Entry:
        # Caller holds self._lock.
        entry = self._entries.get(identity)
        if entry is not None and self._expired(entry):
            entry = None
        if entry is None:
            entry = _Entry()
            self._entries[identity] = entry
        return entry

    def _expired(self, entry: _Entry) -> bool:
        if not self._window or entry.count == 0:
            return False
        return entry.last_failure < time.time() - self._window
