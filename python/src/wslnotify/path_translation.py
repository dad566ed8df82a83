"""Translation between WSL and Windows path namespaces."""

from __future__ import annotations

import subprocess
from typing import List, Protocol

TEMP_DIRECTORY_SCRIPT = "[System.IO.Path]::GetTempPath()"


class PathTranslationError(RuntimeError):
    """Raised when a path cannot be translated."""


class PathTranslator(Protocol):
    """Converts paths between the caller (WSL) and sink (Windows) namespaces."""

    def to_sink_namespace(self, path: str) -> str:
        """Return the Windows form of a WSL path."""

    def to_caller_namespace(self, path: str) -> str:
        """Return the WSL form of a Windows path."""

    def sink_temp_directory(self) -> str:
        """Return the Windows temporary directory."""


def is_caller_path(path: str) -> bool:
    """Return whether a path belongs to the WSL namespace.

    :param path: Path to classify.
    :type path: str
    :return: True for absolute POSIX paths.
    :rtype: bool
    """
    return path.startswith("/")


class WslPathTranslator:
    """Path translator backed by ``wslpath`` and PowerShell."""

    def __init__(self, wslpath_command: str, powershell_path: str) -> None:
        self.wslpath_command = wslpath_command
        self.powershell_path = powershell_path

    def to_sink_namespace(self, path: str) -> str:
        return _run([self.wslpath_command, "-w", path])

    def to_caller_namespace(self, path: str) -> str:
        return _run([self.wslpath_command, "-u", path])

    def sink_temp_directory(self) -> str:
        directory = _run(
            [self.powershell_path, "-NoProfile", "-Command", TEMP_DIRECTORY_SCRIPT]
        )
        return directory.rstrip("\\")


def _run(command: List[str]) -> str:
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as error:
        raise PathTranslationError(f"{command[0]}: {error}") from error
    if result.returncode != 0:
        raise PathTranslationError(
            f"{command[0]} exited with code {result.returncode}: "
            f"{result.stderr.strip()}"
        )
    output = result.stdout.strip()
    if not output:
        raise PathTranslationError(f"{command[0]} returned no output")
    return output
