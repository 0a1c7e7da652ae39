"""Event model for request observability.

Pounce connection lifecycle events are reused directly from
``pounce.lifecycle``; this module adds the application-level event recorded
by the request logger.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RequestServed:
    """A request passed through the middleware chain and got a response.

    Attributes:
        method: HTTP method.
        path: Request path (without query string).
        status: Response status code.
        duration_ms: Time spent producing the response in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    method: str
    path: str
    status: int
    duration_ms: float
    timestamp_ns: int


type StackEvent = RequestServed


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
