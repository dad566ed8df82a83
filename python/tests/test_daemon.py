"""Tests for the daemon entry point."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

import wslnotify.daemon as daemon
from wslnotify.config import ServerConfiguration
from wslnotify.server import ServerStartupError


def test_parse_args_defaults() -> None:
    args = daemon.parse_args([])
    assert args.socket_path is None
    assert args.config_path is None
    assert args.log_level == "INFO"


def test_socket_option_overrides_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    served: List[ServerConfiguration] = []
    monkeypatch.setattr(daemon, "run_server", served.append)
    monkeypatch.setattr(daemon, "configure_logging", lambda level: None)
    monkeypatch.delenv("WSL_NOTIFY_SOCK", raising=False)

    assert daemon.main(["--socket", "/tmp/custom.sock"]) == 0
    assert served[0].socket_path == "/tmp/custom.sock"


def test_config_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    served: List[ServerConfiguration] = []
    monkeypatch.setattr(daemon, "run_server", served.append)
    monkeypatch.setattr(daemon, "configure_logging", lambda level: None)
    monkeypatch.setenv("WSL_NOTIFY_SOCK", "/tmp/env.sock")
    config_path = tmp_path / "wsl-notify.yml"
    config_path.write_text("xml_declaration: false\n", encoding="utf-8")

    assert daemon.main(["--config", str(config_path)]) == 0
    assert served[0].socket_path == "/tmp/env.sock"
    assert served[0].xml_declaration is False


def test_startup_error_returns_failure(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    def failing_run(configuration: ServerConfiguration) -> None:
        raise ServerStartupError("cannot remove existing socket /tmp/x.sock")

    monkeypatch.setattr(daemon, "run_server", failing_run)
    monkeypatch.setattr(daemon, "configure_logging", lambda level: None)

    assert daemon.main([]) == 1
    assert "cannot remove existing socket" in capsys.readouterr().err
