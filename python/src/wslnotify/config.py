"""
Daemon configuration defaults and model.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from wslnotify.asset_relocation import DEFAULT_ASSET_PREFIX
from wslnotify.notification_sink import DEFAULT_APP_ID, DEFAULT_POWERSHELL_PATH

SOCKET_PATH_ENVIRONMENT_VARIABLE = "WSL_NOTIFY_SOCK"
DEFAULT_SOCKET_PATH = "/tmp/wsl-notify.sock"

DEFAULT_CONFIGURATION: Dict[str, Any] = {
    "socket_path": DEFAULT_SOCKET_PATH,
    "powershell_path": DEFAULT_POWERSHELL_PATH,
    "app_id": DEFAULT_APP_ID,
    "wslpath_command": "wslpath",
    "asset_prefix": DEFAULT_ASSET_PREFIX,
    "xml_declaration": True,
}


class ServerConfiguration(BaseModel):
    """Daemon configuration.

    :param socket_path: Unix socket the daemon listens on.
    :type socket_path: str
    :param powershell_path: WSL path to ``powershell.exe``.
    :type powershell_path: str
    :param app_id: AppUserModelID the toasts are shown under.
    :type app_id: str
    :param wslpath_command: Command used to translate paths.
    :type wslpath_command: str
    :param asset_prefix: File name prefix for relocated images.
    :type asset_prefix: str
    :param xml_declaration: Whether toast documents carry an XML declaration.
    :type xml_declaration: bool
    """

    model_config = ConfigDict(extra="forbid")

    socket_path: str = Field(min_length=1)
    powershell_path: str = Field(min_length=1)
    app_id: str = Field(min_length=1)
    wslpath_command: str = Field(min_length=1)
    asset_prefix: str = Field(min_length=1)
    xml_declaration: bool
