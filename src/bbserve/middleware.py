"""Request logging middleware.

Prints one compact line per request to stderr::

    GET /supersecret 418 0.412 ms

and records a ``RequestServed`` event on the collector when one is given.
The response is passed through untouched.
"""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING, TextIO

from chirp import HTTPError

from bbserve.banner import supports_color

if TYPE_CHECKING:
    from chirp import Request
    from chirp.middleware.protocol import AnyResponse, Next

    from bbserve.observability.collector import StackCollector


def _status_color(status: int) -> str:
    if status >= 500:
        return "\033[31m"
    if status >= 400:
        return "\033[33m"
    if status >= 300:
        return "\033[36m"
    return "\033[32m"


def format_request_line(
    method: str,
    path: str,
    status: int,
    duration_ms: float,
    *,
    color: bool = False,
) -> str:
    """Format a single request log line."""
    if not color:
        return f"{method} {path} {status} {duration_ms:.3f} ms"
    return (
        f"\033[2m{method} {path}\033[0m "
        f"{_status_color(status)}{status}\033[0m "
        f"\033[2m{duration_ms:.3f} ms\033[0m"
    )


class RequestLogger:
    """Chirp middleware that logs every request after it is handled.

    Args:
        collector: Optional collector receiving a ``RequestServed`` event
            per request.
        stream: Where log lines go.  Defaults to ``sys.stderr`` at call time.

    """

    __slots__ = ("_collector", "_stream")

    def __init__(
        self,
        collector: StackCollector | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._collector = collector
        self._stream = stream

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            # Routing errors (404, 405) become responses after the middleware
            # chain unwinds; log them with their final status.
            self._log(request, exc.status, start)
            raise
        except Exception:
            self._log(request, 500, start)
            raise
        self._log(request, getattr(response, "status", 200), start)
        return response

    def _log(self, request: Request, status: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        stream = self._stream or sys.stderr
        line = format_request_line(
            request.method,
            request.path,
            status,
            duration_ms,
            color=supports_color(stream),
        )
        print(line, file=stream)

        if self._collector is not None:
            self._collector.record_request(
                request.method, request.path, status, duration_ms=duration_ms,
            )
