"""Unix socket server for notification requests."""

from __future__ import annotations

import logging
import socket
import socketserver
from pathlib import Path
from typing import Protocol

from wslnotify.asset_relocation import AssetRelocator
from wslnotify.config import ServerConfiguration
from wslnotify.dispatcher import DispatchError, NotificationDispatcher
from wslnotify.models import NotifyRequest, NotifyResponse
from wslnotify.notification_sink import PowerShellSink
from wslnotify.path_translation import WslPathTranslator
from wslnotify.protocol import (
    MAX_FRAME_SIZE,
    RequestDecodeError,
    decode_request,
    encode_response,
)

logger = logging.getLogger(__name__)


class ServerStartupError(RuntimeError):
    """Raised when the server cannot bind its socket."""


class Dispatcher(Protocol):
    def dispatch(self, request: NotifyRequest) -> None:
        """Show a notification or raise."""


def process_frame(dispatcher: Dispatcher, raw: bytes) -> NotifyResponse:
    """Decode one request frame, dispatch it, and build the response.

    :param dispatcher: Dispatcher that shows the notification.
    :type dispatcher: Dispatcher
    :param raw: Request bytes.
    :type raw: bytes
    :return: Response for the client.
    :rtype: NotifyResponse
    """
    try:
        request = decode_request(raw)
        dispatcher.dispatch(request)
    except (RequestDecodeError, DispatchError) as error:
        logger.warning("notification request failed: %s", error)
        return NotifyResponse.failure(str(error))
    except Exception as error:
        logger.exception("unexpected error while handling notification request")
        return NotifyResponse.failure(str(error) or type(error).__name__)
    return NotifyResponse.ok()


def handle_connection(connection: socket.socket, dispatcher: Dispatcher) -> None:
    """Serve a single request/response exchange and close the connection.

    :param connection: Accepted client connection.
    :type connection: socket.socket
    :param dispatcher: Dispatcher that shows the notification.
    :type dispatcher: Dispatcher
    """
    try:
        try:
            raw = connection.recv(MAX_FRAME_SIZE)
        except OSError as error:
            logger.warning("failed to read notification request: %s", error)
            return
        if not raw:
            return
        response = process_frame(dispatcher, raw)
        try:
            connection.sendall(encode_response(response))
        except OSError as error:
            logger.warning("failed to send notification response: %s", error)
    finally:
        connection.close()


class NotifyRequestHandler(socketserver.BaseRequestHandler):
    """Hand each accepted connection to ``handle_connection``."""

    def handle(self) -> None:
        handle_connection(self.request, self.server.dispatcher)


class NotifyServer(socketserver.ThreadingUnixStreamServer):
    """Unix socket server that handles each connection on its own thread."""

    daemon_threads = True

    def __init__(self, socket_path: Path, dispatcher: Dispatcher) -> None:
        self.socket_path = socket_path
        self.dispatcher = dispatcher
        remove_stale_socket(socket_path)
        try:
            super().__init__(str(socket_path), NotifyRequestHandler)
        except OSError as error:
            raise ServerStartupError(
                f"cannot listen on {socket_path}: {error}"
            ) from error

    def handle_error(self, request: object, client_address: object) -> None:
        logger.exception("error while serving connection")


def remove_stale_socket(socket_path: Path) -> None:
    """Remove a leftover socket file before binding.

    :param socket_path: Socket path to clear.
    :type socket_path: Path
    :raises ServerStartupError: If the file exists and cannot be removed.
    """
    try:
        socket_path.unlink()
    except FileNotFoundError:
        return
    except OSError as error:
        raise ServerStartupError(
            f"cannot remove existing socket {socket_path}: {error}"
        ) from error


def build_dispatcher(configuration: ServerConfiguration) -> NotificationDispatcher:
    """Wire the production dispatcher from configuration.

    :param configuration: Daemon configuration.
    :type configuration: ServerConfiguration
    :return: Dispatcher backed by PowerShell and wslpath.
    :rtype: NotificationDispatcher
    """
    translator = WslPathTranslator(
        wslpath_command=configuration.wslpath_command,
        powershell_path=configuration.powershell_path,
    )
    return NotificationDispatcher(
        sink=PowerShellSink(
            powershell_path=configuration.powershell_path,
            app_id=configuration.app_id,
        ),
        relocator=AssetRelocator(translator, prefix=configuration.asset_prefix),
        xml_declaration=configuration.xml_declaration,
    )


def run_server(configuration: ServerConfiguration) -> None:
    """Serve notification requests until the process is terminated.

    :param configuration: Daemon configuration.
    :type configuration: ServerConfiguration
    :raises ServerStartupError: If the socket cannot be bound.
    """
    socket_path = Path(configuration.socket_path)
    with NotifyServer(socket_path, build_dispatcher(configuration)) as server:
        logger.info("Listening on %s", socket_path)
        server.serve_forever()
