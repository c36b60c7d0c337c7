"""ObserverRegistry: thread-safe synchronous fan-out of decoded samples."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from .base import Sample


@dataclass
class ObserverFailure:
    """A listener callback that raised during a broadcast."""

    listener: object
    sample: Sample
    error: Exception


class ObserverRegistry:
    """Ordered, duplicate-free set of listeners.

    The member list is an immutable tuple swapped under a lock, so a
    broadcast iterates a snapshot and listeners may register or
    unregister (themselves or others) from any thread, including from
    inside a callback.

    Usage::

        registry = ObserverRegistry()
        registry.register(listener)
        failures = registry.broadcast(sample)
    """

    def __init__(self) -> None:
        self._listeners: tuple[object, ...] = ()
        self._lock = threading.Lock()

    def register(self, listener: object) -> None:
        """Add ``listener`` at the end; no-op if it is already registered."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners = self._listeners + (listener,)

    def unregister(self, listener: object) -> None:
        """Remove ``listener``; no-op if it is not registered."""
        with self._lock:
            if listener in self._listeners:
                self._listeners = tuple(other for other in self._listeners if other != listener)

    def snapshot(self) -> tuple[object, ...]:
        return self._listeners

    def broadcast(self, sample: Sample) -> list[ObserverFailure]:
        """Deliver ``sample`` to every capable listener, in registration order.

        Every listener in the snapshot is attempted even if an earlier one
        raises; the failures are returned once all have run.
        """
        failures: list[ObserverFailure] = []
        for listener in self.snapshot():
            try:
                sample.deliver(listener)
            except Exception as e:
                failures.append(ObserverFailure(listener, sample, e))
        return failures

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners
