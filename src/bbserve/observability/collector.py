"""Stack collector — bridges Pounce lifecycle events into the event log.

Implements Pounce's ``LifecycleCollector`` protocol so it can be passed
directly to Pounce workers.  The request logger records application-level
``RequestServed`` events through the same collector.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from multiple Pounce worker threads.

"""

from __future__ import annotations

from typing import Any

from bbserve.observability.events import RequestServed, now_ns
from bbserve.observability.log import EventLog


class StackCollector:
    """Unified event collector for the server.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record(self, event: Any) -> None:
        """Record a Pounce lifecycle event.

        Implements the ``LifecycleCollector.record()`` protocol.
        Pounce events are stored directly since they are frozen dataclasses.

        """
        self._log.append(event)

    def record_request(
        self,
        method: str,
        path: str,
        status: int,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a served request."""
        self._log.append(
            RequestServed(
                method=method,
                path=path,
                status=status,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
