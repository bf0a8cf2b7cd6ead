"""Thread-safe key/value cache with absolute, lazily checked expiry."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class TTLCache(Generic[V]):
    """Store values with an expiry timestamp.

    Expired entries are never swept. ``get`` simply reports them as absent, so
    the last value stays available through :meth:`peek` until it is replaced by
    :meth:`set`.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[V]:
        """Return the value for ``key`` or ``None`` when missing or expired."""

        with self._lock:
            entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.value

    def set(self, key: Hashable, value: V, ttl: timedelta) -> CacheEntry[V]:
        """Store ``value`` for ``ttl``, replacing whatever was there."""

        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        entry = CacheEntry(value=value, expires_at=self._clock() + ttl)
        with self._lock:
            self._entries[key] = entry
        return entry

    def peek(self, key: Hashable) -> Optional[CacheEntry[V]]:
        """Return the raw entry for ``key`` even if it has expired."""

        with self._lock:
            return self._entries.get(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CacheEntry", "TTLCache", "utcnow"]
