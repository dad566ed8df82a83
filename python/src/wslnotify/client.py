"""Client for the notification socket."""

from __future__ import annotations

import socket
from pathlib import Path
from typing import List, Optional

from wslnotify.models import NotifyRequest, NotifyResponse
from wslnotify.protocol import (
    MAX_FRAME_SIZE,
    decode_response,
    encode_request,
)


class NotifyClientError(RuntimeError):
    """Raised when the daemon cannot be reached or answers badly."""


def send_notification(
    socket_path: Path, request: NotifyRequest, timeout: Optional[float] = 5.0
) -> NotifyResponse:
    """Send a notification request to the daemon and return its response.

    :param socket_path: Daemon socket path.
    :type socket_path: Path
    :param request: Notification request.
    :type request: NotifyRequest
    :param timeout: Socket timeout in seconds, None to block.
    :type timeout: Optional[float]
    :return: Daemon response.
    :rtype: NotifyResponse
    :raises NotifyClientError: If communication fails.
    """
    payload = encode_request(request)
    if len(payload) > MAX_FRAME_SIZE:
        raise NotifyClientError(
            f"request is {len(payload)} bytes, limit is {MAX_FRAME_SIZE}"
        )
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(str(socket_path))
            sock.sendall(payload)
            response_raw = _read_until_closed(sock)
    except OSError as error:
        raise NotifyClientError(f"daemon connection failed: {error}") from error

    if not response_raw:
        raise NotifyClientError("empty daemon response")
    try:
        return decode_response(response_raw)
    except ValueError as error:
        raise NotifyClientError(f"invalid daemon response: {error}") from error


def _read_until_closed(sock: socket.socket) -> bytes:
    chunks: List[bytes] = []
    while True:
        chunk = sock.recv(MAX_FRAME_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)
