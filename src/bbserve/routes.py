"""Routes — the greeting, the teapot, and the 404 page.

Every handler returns a fixed response; nothing here reads request data or
shared state, so repeated requests always produce the same response::

    GET /              -> 200  greeting (plain text or rendered index.html)
    GET /supersecret   -> 418  teapot message + X-Tea header
    anything else      -> 404  "404 Page Not Found!"

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chirp import Response, Template

if TYPE_CHECKING:
    from chirp import App, Request

    from bbserve._types import HandlerFunc, RoutePath
    from bbserve.config import BBConfig

GREETING = "Welcome to bbCode my Dudes"
PAGE_TITLE = "bbCode.tech"
TEAPOT_MESSAGE = "418 I'm a Teapot! Congrats you found the Super Sercet Path"
NOT_FOUND_MESSAGE = "404 Page Not Found!"

TEA_HEADER = ("X-Tea", "Tea is good!")

INDEX_TEMPLATE = "index.html"
SUPERSECRET_PATH: RoutePath = "/supersecret"

_TEXT = "text/plain; charset=utf-8"


async def index(request: Request) -> Template:
    """Render the landing page with its fixed title."""
    return Template(INDEX_TEMPLATE, title=PAGE_TITLE, greeting=GREETING)


async def plain_index(request: Request) -> Response:
    """Return the greeting as plain text."""
    return Response(body=GREETING, content_type=_TEXT)


async def supersecret(request: Request) -> Response:
    name, value = TEA_HEADER
    return (
        Response(body=TEAPOT_MESSAGE, content_type=_TEXT)
        .with_status(418)
        .with_header(name, value)
    )


async def not_found(request: Request) -> Response:
    """404 handler for every path no route or static file claims."""
    return Response(body=NOT_FOUND_MESSAGE, status=404, content_type=_TEXT)


def register_routes(app: App, config: BBConfig) -> int:
    """Register the root, teapot, and 404 handlers on *app*.

    Returns the number of routes registered (the 404 handler is not a route).

    """
    root_handler: HandlerFunc = index if config.templated else plain_index
    app.route("/", methods=["GET"], name="index")(root_handler)
    app.route(SUPERSECRET_PATH, methods=["GET"], name="supersecret")(supersecret)
    app.error(404)(not_found)
    return 2
