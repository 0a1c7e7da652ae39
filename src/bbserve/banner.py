"""Startup banner and shutdown summary — mode-aware status output.

Prints a short banner with timing and status indicators before the server
starts accepting connections, and a one-line request tally after it stops.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from bbserve._types import ServeMode
    from bbserve.config import BBConfig
    from bbserve.observability import EventLog


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def supports_color(stream: TextIO) -> bool:
    """Return True if *stream* is a terminal that accepts ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


_COLOR = supports_color(sys.stderr)

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "dev": (_GREEN, "dev"),
    "serve": (_CYAN, "serve"),
}


def _mode_badge(mode: ServeMode) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


def print_banner(
    config: BBConfig,
    mode: ServeMode,
    *,
    route_count: int = 0,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the bbserve startup banner to stderr.

    Args:
        config: Resolved BBConfig.
        mode: One of ``"dev"``, ``"serve"``.
        route_count: Number of routes registered.
        load_ms: Time spent building the app in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from bbserve import __version__

    badge = _mode_badge(mode)
    header = f"  {_BOLD}bbserve{_RESET} {_DIM}v{__version__}{_RESET}  {badge}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    routes_label = "route" if route_count == 1 else "routes"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {route_count} {routes_label} registered{timing}")

    page = "templated" if config.templated else "plain text"
    lines.append(f"  {_DIM}├─{_RESET} root page: {page}")
    lines.append(f"  {_DIM}├─{_RESET} templates: {_DIM}{config.templates_path}{_RESET}")
    lines.append(f"  {_DIM}├─{_RESET} static: {_DIM}{config.static_path}{_RESET}")

    if mode == "serve":
        workers_label = str(config.workers) if config.workers > 0 else "auto"
        lines.append(f"  {_DIM}├─{_RESET} workers: {workers_label}")

    url = f"http://{config.host}:{config.port}"
    lines.append("")
    lines.append(f"  {_clickable_url(url)}")
    lines.append(f"  {_GREEN}server is up listening on port {config.port}!{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def startup_warnings(config: BBConfig) -> list[str]:
    """Return banner warnings for project directories that do not exist.

    Neither is fatal: the bundled theme supplies ``index.html`` and the
    stylesheet when the user directories are absent.
    """
    warnings: list[str] = []
    if not config.templates_path.is_dir():
        warnings.append(
            f"{config.templates_dir}/ does not exist, using the bundled templates",
        )
    if not config.static_path.is_dir():
        warnings.append(
            f"{config.static_dir}/ does not exist, serving bundled assets only",
        )
    return warnings


def print_request_summary(log: EventLog) -> None:
    """Print how many requests were served, grouped by status, to stderr.

    Example::

        3 requests served  (200 x1, 404 x1, 418 x1)

    """
    from bbserve.observability import RequestServed

    served = log.query(event_type=RequestServed)
    by_status: dict[int, int] = {}
    for event in served:
        by_status[event.status] = by_status.get(event.status, 0) + 1

    label = "request" if len(served) == 1 else "requests"
    line = f"  {_BOLD}{len(served)}{_RESET} {label} served"
    if by_status:
        tally = ", ".join(f"{status} x{count}" for status, count in sorted(by_status.items()))
        line += f"  {_DIM}({tally}){_RESET}"

    other = log.stats()["total"] - len(served)
    if other:
        noun = "connection event" if other == 1 else "connection events"
        line += f"  {_DIM}{other} {noun}{_RESET}"

    print(line, file=sys.stderr)
