# src/buckler/cache.py
"""
Short-lived result cache keyed by user code.

Profile scrapes take tens of seconds, so repeated lookups for the same
player within the TTL are served from memory. Concurrent requests for one
key wait on a per-key lock and reuse the first result instead of
launching a second browser.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class ResultCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        # Only keys with a populate in flight or waiting hold a lock.
        self._key_locks: Dict[str, _KeyLock] = {}
        self._guard = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        with self._guard:
            item = self._entries.get(key)
            if not item:
                return None
            ts, payload = item
            if self._expired(ts, self._clock()):
                self._entries.pop(key, None)
                return None
            return payload

    def set(self, key: str, payload: Any) -> None:
        with self._guard:
            now = self._clock()
            self._evict_expired(now)
            self._entries[key] = (now, payload)

    def get_or_populate(self, key: str, loader: Callable[[], Any]) -> Tuple[Any, bool]:
        """
        Return (payload, hit). On a miss `loader` runs once per key while
        other callers for the same key block; failures are not cached.
        """
        if not self.enabled:
            return (loader(), False)

        key_lock = self._acquire(key)
        try:
            with key_lock.lock:
                cached = self.get(key)
                if cached is not None:
                    return (cached, True)
                payload = loader()
                self.set(key, payload)
                return (payload, False)
        finally:
            self._release(key, key_lock)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()

    def _expired(self, ts: float, now: float) -> bool:
        return now - ts > self.ttl_seconds

    def _evict_expired(self, now: float) -> None:
        # Caller holds _guard.
        stale = [k for k, (ts, _) in self._entries.items() if self._expired(ts, now)]
        for k in stale:
            del self._entries[k]

    def _acquire(self, key: str) -> _KeyLock:
        with self._guard:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = _KeyLock()
                self._key_locks[key] = key_lock
            key_lock.users += 1
            return key_lock

    def _release(self, key: str, key_lock: _KeyLock) -> None:
        with self._guard:
            key_lock.users -= 1
            if key_lock.users == 0:
                self._key_locks.pop(key, None)
