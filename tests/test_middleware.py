"""Tests for bbserve.middleware — request log lines and event recording."""

from __future__ import annotations

import io
from types import SimpleNamespace
from typing import Any

import pytest
from chirp import HTTPError
from chirp.errors import NotFound

from bbserve.middleware import RequestLogger, format_request_line
from bbserve.observability import EventLog, RequestServed, StackCollector


def _request(method: str = "GET", path: str = "/") -> Any:
    return SimpleNamespace(method=method, path=path)


class TestFormatRequestLine:
    """format_request_line — plain and colored output."""

    def test_plain(self) -> None:
        line = format_request_line("GET", "/supersecret", 418, 1.23456)
        assert line == "GET /supersecret 418 1.235 ms"

    def test_colored_contains_ansi(self) -> None:
        line = format_request_line("GET", "/", 200, 0.5, color=True)
        assert "\033[" in line
        assert "200" in line

    def test_error_status_colored_differently(self) -> None:
        ok = format_request_line("GET", "/", 200, 0.1, color=True)
        missing = format_request_line("GET", "/", 404, 0.1, color=True)
        assert ok != missing.replace("404", "200")


class TestRequestLogger:
    """RequestLogger — passes responses through and logs each request."""

    @pytest.mark.asyncio
    async def test_logs_response_status(self) -> None:
        stream = io.StringIO()
        logger = RequestLogger(stream=stream)
        response = SimpleNamespace(status=418)

        async def next_(request: Any) -> Any:
            return response

        result = await logger(_request(path="/supersecret"), next_)

        assert result is response
        assert stream.getvalue().startswith("GET /supersecret 418 ")

    @pytest.mark.asyncio
    async def test_records_on_collector(self) -> None:
        collector = StackCollector(EventLog())
        logger = RequestLogger(collector, stream=io.StringIO())

        async def next_(request: Any) -> Any:
            return SimpleNamespace(status=200)

        await logger(_request(), next_)

        events = collector.log.query(event_type=RequestServed)
        assert len(events) == 1
        assert events[0].method == "GET"
        assert events[0].path == "/"
        assert events[0].status == 200
        assert events[0].duration_ms >= 0

    @pytest.mark.asyncio
    async def test_http_error_logged_and_reraised(self) -> None:
        stream = io.StringIO()
        collector = StackCollector(EventLog())
        logger = RequestLogger(collector, stream=stream)

        async def next_(request: Any) -> Any:
            raise NotFound("No route")

        with pytest.raises(HTTPError):
            await logger(_request(path="/nope"), next_)

        assert "GET /nope 404" in stream.getvalue()
        assert collector.log.query()[0].status == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_logged_as_500(self) -> None:
        stream = io.StringIO()
        logger = RequestLogger(stream=stream)

        async def next_(request: Any) -> Any:
            msg = "boom"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="boom"):
            await logger(_request(), next_)

        assert "GET / 500" in stream.getvalue()

    @pytest.mark.asyncio
    async def test_no_color_on_non_tty(self) -> None:
        stream = io.StringIO()
        logger = RequestLogger(stream=stream)

        async def next_(request: Any) -> Any:
            return SimpleNamespace(status=200)

        await logger(_request(), next_)
        assert "\033[" not in stream.getvalue()
