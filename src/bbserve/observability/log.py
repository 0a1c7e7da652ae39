"""Event log — bounded store for request and connection events.

The request logger and Pounce both write here while the server runs; the
shutdown summary reads it back once the server stops.

Thread Safety:
    Every method takes the internal ``threading.Lock``, so Pounce worker
    threads can append while another thread queries.

"""

import threading
from collections import deque
from typing import Any


class EventLog:
    """Ring buffer of events, newest kept when full.

    Args:
        max_events: Capacity; older events are dropped past this.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[Any] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: Any) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        """Return stored events, newest first.

        Args:
            event_type: Keep only instances of this type.
            path: Keep only events whose ``path`` contains this substring.
            limit: Stop after this many matches.  ``None`` returns them all.

        """
        with self._lock:
            snapshot = list(self._events)

        matches: list[Any] = []
        for event in reversed(snapshot):
            if limit is not None and len(matches) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if path is not None and path not in (getattr(event, "path", None) or ""):
                continue
            matches.append(event)
        return matches

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Count stored events per type name."""
        with self._lock:
            names = [type(event).__name__ for event in self._events]

        by_type: dict[str, int] = {}
        for name in names:
            by_type[name] = by_type.get(name, 0) + 1

        return {
            "total": len(names),
            "max_events": self._max_events,
            "by_type": by_type,
        }
