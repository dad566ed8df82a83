"""Notification dispatch: relocate assets, build the toast, show it."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from wslnotify.models import NotifyRequest
from wslnotify.notification_sink import NotificationSink, SinkOutcome
from wslnotify.path_translation import is_caller_path
from wslnotify.toast_payload import build_toast_xml

logger = logging.getLogger(__name__)


class DispatchError(RuntimeError):
    """Raised when a notification could not be shown."""


class ImageRelocator(Protocol):
    def relocate(self, path: str) -> Optional[str]:
        """Return a Windows path for a WSL image, or None."""


class NotificationDispatcher:
    """Turn a request into a displayed toast."""

    def __init__(
        self,
        sink: NotificationSink,
        relocator: ImageRelocator,
        xml_declaration: bool = True,
    ) -> None:
        self.sink = sink
        self.relocator = relocator
        self.xml_declaration = xml_declaration

    def prepare_request(self, request: NotifyRequest) -> NotifyRequest:
        """Return a request whose image, if any, is reachable from Windows.

        :param request: Request as received.
        :type request: NotifyRequest
        :return: Request copy with the image relocated or dropped.
        :rtype: NotifyRequest
        """
        image = request.image
        if image is None or not is_caller_path(image.src):
            return request
        relocated = self.relocator.relocate(image.src)
        if relocated is None:
            logger.warning("dropping image %s from notification", image.src)
            return request.model_copy(update={"image": None})
        return request.model_copy(
            update={"image": image.model_copy(update={"src": relocated})}
        )

    def dispatch(self, request: NotifyRequest) -> None:
        """Show a notification.

        :param request: Notification request.
        :type request: NotifyRequest
        :raises DispatchError: If the sink fails or cannot be started.
        """
        prepared = self.prepare_request(request)
        document = build_toast_xml(prepared, xml_declaration=self.xml_declaration)
        try:
            outcome = self.sink.show(document)
        except OSError as error:
            raise DispatchError(f"notification sink failed to start: {error}") from error
        if not outcome.succeeded:
            raise DispatchError(_describe_failure(outcome))


def _describe_failure(outcome: SinkOutcome) -> str:
    message = f"notification sink exited with code {outcome.exit_status}"
    diagnostic = _decode(outcome.stderr) or _decode(outcome.stdout)
    if diagnostic:
        return f"{message}: {diagnostic}"
    return message


def _decode(output: bytes) -> str:
    return output.decode("utf-8", errors="replace").strip()
