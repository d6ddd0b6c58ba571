"""In-memory session provider with LRU-ordered expiry.

Sessions live in a single ``OrderedDict`` that doubles as the lookup index
and the recency list: the first item is the least recently used, the last
is the most recently used. Every access moves the session to the end, so
the garbage collector can sweep from the front and stop at the first
session that is still alive.

Not shared across processes and lost on restart; fine for development and
single-process deployments.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Any, Callable

Clock = Callable[[], float]


class MemorySession:
    """A session stored by ``MemoryProvider``."""

    def __init__(self, provider: MemoryProvider, session_id: str, now: float) -> None:
        self._provider = provider
        self._id = session_id
        self._values: dict[str, Any] = {}
        self.last_accessed = now

    @property
    def id(self) -> str:
        return self._id

    def set(self, key: str, value: Any) -> None:
        with self._provider._lock:
            self._values[key] = value
            self._provider._touch(self._id)

    def get(self, key: str, default: Any = None) -> Any:
        with self._provider._lock:
            self._provider._touch(self._id)
            return self._values.get(key, default)

    def delete(self, key: str) -> None:
        with self._provider._lock:
            self._values.pop(key, None)
            self._provider._touch(self._id)

    def keys(self) -> list[str]:
        with self._provider._lock:
            self._provider._touch(self._id)
            return list(self._values)

    def __repr__(self) -> str:
        return f"MemorySession(id={self._id[:8]}..., keys={len(self._values)})"


class MemoryProvider:
    """Thread-safe recency-ordered session store.

    One lock guards the whole ordering; every operation is O(1) except
    ``gc``, which is O(k) in the number of expired sessions.
    """

    def __init__(self, clock: Clock = time.time) -> None:
        self._sessions: OrderedDict[str, MemorySession] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock

    def init(self, session_id: str) -> MemorySession:
        with self._lock:
            session = MemorySession(self, session_id, self._clock())
            self._sessions[session_id] = session
            # Re-initialising an existing id must still land at the MRU end.
            self._sessions.move_to_end(session_id)
            return session

    def read(self, session_id: str) -> MemorySession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            session.last_accessed = self._clock()
            self._sessions.move_to_end(session_id)
            return session

    def update(self, session_id: str) -> None:
        """Mark a session as just used. Unknown ids are ignored."""
        with self._lock:
            self._touch(session_id)

    def _touch(self, session_id: str) -> None:
        # Caller holds self._lock.
        session = self._sessions.get(session_id)
        if session is not None:
            session.last_accessed = self._clock()
            self._sessions.move_to_end(session_id)

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def gc(self, max_lifetime: float) -> int:
        removed = 0
        with self._lock:
            now = self._clock()
            while self._sessions:
                session_id, session = next(iter(self._sessions.items()))
                if session.last_accessed + max_lifetime >= now:
                    break
                del self._sessions[session_id]
                removed += 1
        return removed

    def session_ids(self) -> list[str]:
        """Snapshot of session ids, most recently used first."""
        with self._lock:
            return list(reversed(self._sessions))

    def clear(self) -> None:
        """Remove all sessions (for testing)."""
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
