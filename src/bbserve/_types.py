"""Shared type definitions for bbserve."""

from collections.abc import Callable
from typing import Any, Literal

# Mode of operation
type ServeMode = Literal["dev", "serve"]

# Route URL path (e.g., "/", "/supersecret")
type RoutePath = str

# Handler function for a route or error page
type HandlerFunc = Callable[..., Any]
