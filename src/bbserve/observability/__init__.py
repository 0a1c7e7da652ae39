"""Request observability — one event stream for server and app.

Aggregates events from:
- **Pounce**: Connection lifecycle (open, request, response, disconnect, close)
- **bbserve**: Requests served through the middleware chain

Quick Start:
    >>> from bbserve.observability import StackCollector, EventLog
    >>> log = EventLog()
    >>> collector = StackCollector(log)
    >>> # Pass collector to Pounce as lifecycle_collector
    >>> # RequestLogger records events via collector.record_request(...)

"""

from bbserve.observability.collector import StackCollector
from bbserve.observability.events import RequestServed, StackEvent, now_ns
from bbserve.observability.log import EventLog

__all__ = [
    "EventLog",
    "RequestServed",
    "StackCollector",
    "StackEvent",
    "now_ns",
]
