"""bbserve — the bbCode.tech greeting server on the Bengal stack.

Serves three things and nothing else::

    GET /              200  "Welcome to bbCode my Dudes" (or the themed page)
    GET /supersecret   418  teapot message with an ``X-Tea`` header
    anything else      404  "404 Page Not Found!"

Quick start::

    import bbserve

    bbserve.dev(".")              # Local development, port 3000 or $PORT
    bbserve.serve(".")            # Multi-worker production server

Built on:

    pounce      ASGI server       (serves apps)
    chirp       Web framework     (routes and middleware)
    kida        Template engine   (renders the landing page)

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "BBConfig",
    "__version__",
    "create_app",
    "dev",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import bbserve`` fast; Chirp and Pounce load on first use.
    """
    if name == "BBConfig":
        from bbserve.config import BBConfig

        return BBConfig

    if name == "create_app":
        from bbserve.app import create_app

        return create_app

    if name == "dev":
        from bbserve.app import dev

        return dev

    if name == "serve":
        from bbserve.app import serve

        return serve

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
