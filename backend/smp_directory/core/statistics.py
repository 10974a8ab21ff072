"""Keyed Counters — process-wide invocation statistics.

Invariants:
    - Counters only grow; there is no reset or decrement
    - increment() is safe under concurrent callers (no lost updates)
    - get_keyed_counter(name) returns the same instance for the same name

Design Decisions:
    - Module-level registry: counters live for the process lifetime and are read
      by the statistics route, mirroring how monitoring reads them
    - threading.Lock over asyncio primitives: sync handlers may run in a threadpool
"""

import threading


class KeyedCounter:
    """Monotonic counters keyed by string."""

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def increment(self, key: str, by: int = 1) -> int:
        if by < 0:
            raise ValueError("Counters cannot be decremented")
        with self._lock:
            value = self._counts.get(key, 0) + by
            self._counts[key] = value
            return value

    def get(self, key: str) -> int:
        with self._lock:
            return self._counts.get(key, 0)

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def __repr__(self) -> str:
        return f"KeyedCounter({self.name!r}, {self.snapshot()!r})"


_registry: dict[str, KeyedCounter] = {}
_registry_lock = threading.Lock()


def get_keyed_counter(name: str) -> KeyedCounter:
    """Return the process-wide counter registered under name."""
    with _registry_lock:
        counter = _registry.get(name)
        if counter is None:
            counter = KeyedCounter(name)
            _registry[name] = counter
        return counter


def all_counters() -> dict[str, dict[str, int]]:
    """Snapshot of every registered counter."""
    with _registry_lock:
        counters = list(_registry.values())
    return {c.name: c.snapshot() for c in sorted(counters, key=lambda c: c.name)}
