"""bbserve application — Chirp app wiring and the two run modes.

``create_app`` builds a Chirp App with the greeting routes, the theme's
template chain, static files and the ambient middleware.  ``dev`` and
``serve`` are the public entry points.
"""

import time
from pathlib import Path
from typing import TYPE_CHECKING

from bbserve._errors import ConfigError, TemplateError
from bbserve.config import BBConfig
from bbserve.config_loader import load_config

if TYPE_CHECKING:
    from chirp import App
    from pounce.config import ServerConfig

    from bbserve._types import ServeMode
    from bbserve.observability import StackCollector


def _create_chirp_app(config: BBConfig, *, debug: bool = False) -> App:
    """Create a Chirp App configured from *config*.

    Uses the theme fallback chain: user templates take priority, the
    bundled default theme fills the gaps.  Chirp's ``template_dir`` takes
    the user directory and ``component_dirs`` the fallbacks, which Chirp
    chains into a single Kida loader.

    Chirp's own static mount is disabled (``static_dir=None``) because it
    can only serve under a prefix; ``_mount_static_files`` serves at ``/``.

    Raises:
        ConfigError: If Chirp rejects the resulting configuration.

    """
    from chirp import App, AppConfig, ConfigurationError

    from bbserve.theme import get_template_dirs

    template_dirs = get_template_dirs(config)
    probe_path = "/health" if config.probes else None
    ready_path = "/ready" if config.probes else None

    try:
        app_config = AppConfig(
            template_dir=template_dirs[0],
            component_dirs=tuple(template_dirs[1:]),
            static_dir=None,
            debug=debug,
            host=config.host,
            port=config.port,
            workers=config.workers,
            health_path=probe_path,  # type: ignore[arg-type]
            ready_path=ready_path,  # type: ignore[arg-type]
        )
    except ConfigurationError as exc:
        msg = f"Invalid server configuration: {exc}"
        raise ConfigError(msg) from exc

    return App(config=app_config)


def _wire_middleware(
    app: App,
    config: BBConfig,
    collector: StackCollector | None = None,
) -> None:
    """Add request logging, CORS and security headers, outermost first."""
    from chirp.middleware import (
        CORSConfig,
        CORSMiddleware,
        SecurityHeadersConfig,
        SecurityHeadersMiddleware,
    )

    from bbserve.middleware import RequestLogger

    if config.request_log:
        app.add_middleware(RequestLogger(collector))
    if config.cors_origins:
        app.add_middleware(CORSMiddleware(CORSConfig(allow_origins=config.cors_origins)))
    if config.security_headers:
        app.add_middleware(SecurityHeadersMiddleware(SecurityHeadersConfig()))


def _wire_routes(app: App, config: BBConfig) -> int:
    """Register the greeting, teapot and 404 handlers.

    Returns the number of routes registered.

    Raises:
        TemplateError: If the templated root page is enabled but no
            ``index.html`` exists anywhere in the template chain.

    """
    from bbserve.routes import INDEX_TEMPLATE, register_routes
    from bbserve.theme import get_template_dirs

    if config.templated and not any(
        (d / INDEX_TEMPLATE).is_file() for d in get_template_dirs(config)
    ):
        msg = f"Template {INDEX_TEMPLATE!r} not found in the template chain"
        raise TemplateError(msg)

    return register_routes(app, config)


def _mount_static_files(app: App, config: BBConfig) -> None:
    """Mount static file middleware with theme fallback.

    Mounts the user static directory first, then bundled theme assets, both
    at ``/``.  User files take precedence; paths with no file fall through
    to the routes.

    """
    from chirp.middleware import StaticFiles

    from bbserve.theme import get_asset_dirs

    for asset_dir in get_asset_dirs(config):
        if asset_dir.is_dir():
            app.add_middleware(StaticFiles(directory=asset_dir, prefix="/"))


def _build_app(
    config: BBConfig,
    *,
    debug: bool = False,
    collector: StackCollector | None = None,
) -> tuple[App, int]:
    """Build the app and return it with the number of routes registered."""
    app = _create_chirp_app(config, debug=debug)
    _wire_middleware(app, config, collector)
    route_count = _wire_routes(app, config)
    _mount_static_files(app, config)
    return app, route_count


def create_app(
    config: BBConfig,
    *,
    debug: bool = False,
    collector: StackCollector | None = None,
) -> App:
    """Build the complete, not yet frozen, Chirp app for *config*.

    Args:
        config: Resolved BBConfig.
        debug: Enable Chirp debug mode (reload, debug pages).
        collector: Receives a ``RequestServed`` event per request when
            request logging is enabled.

    """
    app, _ = _build_app(config, debug=debug, collector=collector)
    return app


def _prepare(
    root: str | Path,
    mode: ServeMode,
    overrides: dict[str, object],
) -> tuple[BBConfig, App, StackCollector]:
    """Load config, build the app and print the banner for *mode*."""
    from bbserve.banner import print_banner, startup_warnings
    from bbserve.observability import EventLog, StackCollector

    config = load_config(Path(root), **overrides)
    t0 = time.perf_counter()

    collector = StackCollector(EventLog())
    app, route_count = _build_app(config, debug=mode == "dev", collector=collector)

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(
        config,
        mode=mode,
        route_count=route_count,
        load_ms=load_ms,
        warnings=startup_warnings(config),
    )
    return config, app, collector


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Start a development server.

    Single worker with Chirp's reload and debug pages enabled.  A request
    summary is printed when the server stops.

    Args:
        root: Path to the project root directory.
        **kwargs: Override BBConfig fields.

    """
    from bbserve.banner import print_request_summary

    config, app, collector = _prepare(root, "dev", kwargs)

    # Pass the collector as Pounce's lifecycle_collector so connection
    # events land in the same EventLog as request events.
    try:
        app.run(host=config.host, port=config.port, lifecycle_collector=collector)
    finally:
        print_request_summary(collector.log)


def build_server_config(config: BBConfig) -> ServerConfig:
    """Translate *config* into a Pounce ``ServerConfig``.

    Pounce writes its own access log; it is turned off when the request
    logger already prints one line per request.
    """
    from pounce.config import ServerConfig

    return ServerConfig(
        host=config.host,
        port=config.port,
        workers=config.workers,  # 0 = auto-detect via Pounce
        access_log=not config.request_log,
        app_name="bbserve",
    )


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Run the server in production mode.

    Multiple Pounce workers share the frozen Chirp app; handlers hold no
    shared mutable state.  A request summary is printed when the server
    stops.

    Args:
        root: Path to the project root directory.
        **kwargs: Override BBConfig fields.

    """
    from pounce.server import Server

    from bbserve.banner import print_request_summary

    config, app, collector = _prepare(root, "serve", kwargs)

    server = Server(build_server_config(config), app, lifecycle_collector=collector)
    try:
        server.run()
    finally:
        print_request_summary(collector.log)
