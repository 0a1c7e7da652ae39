"""bbserve CLI — bbserve dev / bbserve serve.

Entry point for the ``bbserve`` command-line interface.  Options left unset
fall through to ``bbserve.yaml`` and the ``PORT`` environment variable.
"""

from __future__ import annotations

import argparse
import sys

from bbserve._errors import BBServeError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the bbserve CLI."""
    parser = argparse.ArgumentParser(
        prog="bbserve",
        description="The bbCode.tech greeting server.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # bbserve dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Start the development server",
    )
    _add_common_arguments(dev_parser)

    # bbserve serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the production server",
    )
    _add_common_arguments(serve_parser)
    serve_parser.add_argument(
        "--workers", type=int, default=None, help="Worker count (0=auto)",
    )

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument(
        "--port", type=int, default=None, help="Bind port (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--plain", action="store_true", help="Serve the greeting as plain text",
    )


def _get_version() -> str:
    """Get the package version."""
    from bbserve import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Collect the options actually given on the command line."""
    overrides: dict[str, object] = {"host": args.host, "port": args.port}
    if getattr(args, "workers", None) is not None:
        overrides["workers"] = args.workers
    if args.plain:
        overrides["templated"] = False
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from bbserve.app import dev, serve

    run = dev if args.command == "dev" else serve
    try:
        run(root=args.root, **_overrides(args))
    except BBServeError as exc:
        print(f"bbserve: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
