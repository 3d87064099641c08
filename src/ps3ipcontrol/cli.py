"""Command-line interface for the PS3 control proxy.

Usage::

    ps3ipcontrol F0:F0:02:xx:xx:xx [port]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    from ps3ipcontrol.config.settings import DEFAULT_PORT

    parser = argparse.ArgumentParser(
        prog="ps3ipcontrol",
        description="HTTP proxy for IP control of a PlayStation 3 console",
    )
    parser.add_argument(
        "bd_address",
        help="Bluetooth Device Address of the PS3 to connect to",
    )
    parser.add_argument(
        "port",
        nargs="?",
        type=_port,
        default=None,
        help=f"Port to bind the proxy server to (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/ps3ipcontrol.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the ps3ipcontrol CLI."""
    args = parse_args(argv)

    import uvicorn

    from ps3ipcontrol.config.settings import load_settings
    from ps3ipcontrol.proxy.server import create_app
    from ps3ipcontrol.utils.logging import setup_logging, uvicorn_log_config, uvicorn_log_level

    settings = load_settings(args.config)
    settings.device_address = args.bd_address
    if args.port is not None:
        settings.server.port = args.port

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    app = create_app(settings)
    logger.info(
        "Listening on port %d, connected to PS3 at %s",
        settings.server.port, settings.device_address,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=uvicorn_log_config(settings.logging),
        log_level=uvicorn_log_level(settings.logging),
        access_log=settings.logging.access_log,
    )


if __name__ == "__main__":
    main()
