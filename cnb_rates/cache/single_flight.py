"""Coalesce concurrent calls for the same key into one execution."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    __slots__ = ("done", "result", "error", "duplicates")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[T] = None
        self.error: Optional[BaseException] = None
        self.duplicates = 0


class SingleFlight(Generic[T]):
    """Run at most one ``fn`` per key at a time.

    The first caller for a key (the leader) executes ``fn``. Callers that
    arrive while it is running block until it finishes and receive the same
    result, or the same exception.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[Hashable, _Call[T]] = {}

    def do(self, key: Hashable, fn: Callable[[], T]) -> Tuple[T, bool]:
        """Return ``(result, shared)``.

        ``shared`` is True for callers that waited on another caller's ``fn``
        and False for the caller that ran it.
        """

        with self._lock:
            call = self._calls.get(key)
            if call is not None:
                call.duplicates += 1
                leader = False
            else:
                call = _Call()
                self._calls[key] = call
                leader = True

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.result, True  # type: ignore[return-value]

        try:
            call.result = fn()
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                self._calls.pop(key, None)
            call.done.set()
        return call.result, False

    def in_flight(self, key: Hashable) -> int:
        """Number of callers currently waiting on ``key`` (leader included)."""

        with self._lock:
            call = self._calls.get(key)
            return 0 if call is None else call.duplicates + 1


__all__ = ["SingleFlight"]
