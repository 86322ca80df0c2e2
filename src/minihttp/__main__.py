"""
=============================================================================
MINIHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:8080, files from ./static)
    python -m minihttp

    # Custom port and document root
    python -m minihttp --port 3000 --root ./site

    # JSON access logs, 10 second socket timeout
    python -m minihttp --log-format json --timeout 10

Settings come from, highest priority first: command-line flags,
MINIHTTP_* environment variables, built-in defaults.

Exit status is 1 if the configuration is invalid or the listening socket
cannot be bound.

=============================================================================
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from . import __version__
from .config import LOG_LEVELS, ServerConfig
from .observer import LOG_FORMATS
from .server import HTTPServer


logger = logging.getLogger("minihttp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Minimal HTTP/1.1 server: homepage, static files and a submit endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                        # Run with defaults
  python -m minihttp --port 3000            # Custom port
  python -m minihttp --root ./site          # Serve ./site/static/*
  python -m minihttp --log-format json      # JSON access logs
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help="Bytes read per request; larger requests are truncated (default: 4096)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Socket read/write timeout in seconds (default: none)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # FEATURE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Document root; /static/* is served from <root>/static (default: .)",
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Access log format (default: text)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace, base: ServerConfig) -> ServerConfig:
    """Overlay the flags that were given on top of base."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "buffer_size": args.buffer_size,
        "timeout": args.timeout,
        "static_root": args.root,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args, ServerConfig.from_env())
        server = HTTPServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    server.setup_logging()
    logger.info(f"Starting server on http://{config.host}:{config.port}")

    try:
        server.run()
    except OSError as e:
        logger.error(f"Could not start server: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")

    return 0


if __name__ == "__main__":
    sys.exit(main())
