"""Behave environment hooks."""

from __future__ import annotations

import sys
from pathlib import Path
from tempfile import TemporaryDirectory

PYTHON_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = PYTHON_DIR / "src"
sys.path.insert(0, str(PYTHON_DIR))
sys.path.insert(0, str(SRC_DIR))


def before_scenario(context: object, scenario: object) -> None:
    """Reset context state before each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario object.
    :type scenario: object
    """
    context.temp_dir_object = TemporaryDirectory(dir="/tmp")
    context.temp_dir = Path(context.temp_dir_object.name)
    context.socket_path = context.temp_dir / "notify.sock"
    context.sink = None
    context.server = None
    context.server_thread = None
    context.response_raw = None
    context.request = None


def after_scenario(context: object, scenario: object) -> None:
    """Stop the server and clean up temp directories after each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario object.
    :type scenario: object
    """
    server = getattr(context, "server", None)
    if server is not None:
        server.shutdown()
        server.server_close()
        context.server = None
    thread = getattr(context, "server_thread", None)
    if thread is not None:
        thread.join(timeout=1.0)
        context.server_thread = None
    temp_dir_object = getattr(context, "temp_dir_object", None)
    if temp_dir_object is not None:
        temp_dir_object.cleanup()
        context.temp_dir_object = None
        context.temp_dir = None
