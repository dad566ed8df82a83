"""Daemon entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from wslnotify.config_loader import ConfigurationError, load_server_configuration
from wslnotify.server import ServerStartupError, run_server

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure process-wide logging for the daemon.

    :param level: Log level name such as ``INFO``.
    :type level: str
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def start_daemon(
    socket_path: Optional[str], config_path: Optional[Path], log_level: str
) -> None:
    """Load configuration and serve until terminated.

    :param socket_path: Socket path override.
    :type socket_path: Optional[str]
    :param config_path: Optional YAML configuration file.
    :type config_path: Optional[Path]
    :param log_level: Log level name.
    :type log_level: str
    :raises ConfigurationError: If the configuration is invalid.
    :raises ServerStartupError: If the socket cannot be bound.
    """
    configure_logging(log_level)
    configuration = load_server_configuration(config_path)
    if socket_path:
        configuration = configuration.model_copy(update={"socket_path": socket_path})
    run_server(configuration)


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse daemon CLI arguments.

    :param argv: Command line arguments.
    :type argv: list[str]
    :return: Parsed arguments.
    :rtype: argparse.Namespace
    """
    parser = argparse.ArgumentParser(description="wsl-notify daemon")
    parser.add_argument("--socket", dest="socket_path")
    parser.add_argument("--config", dest="config_path", type=Path)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    """Run the daemon entry point.

    :param argv: Command line arguments.
    :type argv: list[str]
    :return: Process exit status.
    :rtype: int
    """
    args = parse_args(argv)
    try:
        start_daemon(args.socket_path, args.config_path, args.log_level)
    except (ConfigurationError, ServerStartupError) as error:
        print(f"wsl-notify: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
