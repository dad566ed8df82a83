"""Toast display through Windows PowerShell."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Protocol

from jinja2 import Environment

DEFAULT_POWERSHELL_PATH = (
    "/mnt/c/Windows/System32/WindowsPowerShell/v1.0/powershell.exe"
)
DEFAULT_APP_ID = (
    "{1AC14E77-02E7-4E5D-B744-2EB1AE5198B7}\\WindowsPowerShell\\v1.0\\powershell.exe"
)

TOAST_SCRIPT_TEMPLATE = """\
[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null
[Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime] | Out-Null

$app = '{{ app_id }}'

$xml = @'
{{ document }}
'@

$XmlDocument = [Windows.Data.Xml.Dom.XmlDocument]::new()
$XmlDocument.LoadXml($xml)

$toast = [Windows.UI.Notifications.ToastNotification]::new($XmlDocument)
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier($app).Show($toast)
"""


@dataclass(frozen=True)
class SinkOutcome:
    """Result of a sink invocation."""

    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


class NotificationSink(Protocol):
    """Displays a serialized toast document."""

    def show(self, document: str) -> SinkOutcome:
        """Display a toast document and report the outcome."""


def render_toast_script(document: str, app_id: str) -> str:
    """Render the PowerShell script that shows a toast document.

    :param document: Serialized toast XML.
    :type document: str
    :param app_id: AppUserModelID used to create the toast notifier.
    :type app_id: str
    :return: PowerShell script text.
    :rtype: str
    """
    environment = Environment(autoescape=False, keep_trailing_newline=True)
    template = environment.from_string(TOAST_SCRIPT_TEMPLATE)
    return template.render(document=document, app_id=app_id.replace("'", "''"))


class PowerShellSink:
    """Notification sink that runs ``powershell.exe`` through WSL interop."""

    def __init__(
        self,
        powershell_path: str = DEFAULT_POWERSHELL_PATH,
        app_id: str = DEFAULT_APP_ID,
    ) -> None:
        self.powershell_path = powershell_path
        self.app_id = app_id

    def show(self, document: str) -> SinkOutcome:
        """Run PowerShell to display the toast.

        :param document: Serialized toast XML.
        :type document: str
        :return: Exit status and captured output.
        :rtype: SinkOutcome
        :raises OSError: If PowerShell cannot be started.
        """
        script = render_toast_script(document, self.app_id)
        result = subprocess.run(
            [self.powershell_path, "-NoProfile", "-Command", script],
            capture_output=True,
            check=False,
        )
        return SinkOutcome(
            exit_status=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
