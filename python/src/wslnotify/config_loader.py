"""Daemon configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from wslnotify.config import (
    DEFAULT_CONFIGURATION,
    SOCKET_PATH_ENVIRONMENT_VARIABLE,
    ServerConfiguration,
)


class ConfigurationError(RuntimeError):
    """Raised when configuration validation fails."""


def load_server_configuration(
    path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> ServerConfiguration:
    """Load the daemon configuration.

    Defaults are overlaid with the optional YAML file, then with the
    ``WSL_NOTIFY_SOCK`` environment variable.

    :param path: Optional path to a YAML configuration file.
    :type path: Optional[Path]
    :param environ: Environment mapping, defaults to ``os.environ``.
    :type environ: Optional[Mapping[str, str]]
    :return: Loaded configuration.
    :rtype: ServerConfiguration
    :raises ConfigurationError: If the configuration is invalid or missing.
    """
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}
    if path is not None:
        data = _read_configuration_file(path)

    merged = {**DEFAULT_CONFIGURATION, **data}
    socket_path = environ.get(SOCKET_PATH_ENVIRONMENT_VARIABLE)
    if socket_path:
        merged["socket_path"] = socket_path

    try:
        return ServerConfiguration.model_validate(merged)
    except ValidationError as error:
        if _has_unknown_fields(error):
            raise ConfigurationError("unknown configuration fields") from error
        raise ConfigurationError(str(error)) from error


def _read_configuration_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError("configuration file not found")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as error:
        raise ConfigurationError(str(error)) from error
    except yaml.YAMLError as error:
        raise ConfigurationError(f"invalid configuration file: {error}") from error

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("configuration must be a mapping")
    return data


def _has_unknown_fields(error: ValidationError) -> bool:
    return any(item.get("type") == "extra_forbidden" for item in error.errors())
