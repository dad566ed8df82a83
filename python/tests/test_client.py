"""Tests for the socket client."""

from __future__ import annotations

import socket
import threading
from pathlib import Path
from typing import List

import pytest

from wslnotify.client import NotifyClientError, send_notification
from wslnotify.dispatcher import DispatchError
from wslnotify.models import NotifyRequest, NotifyResponse
from wslnotify.server import NotifyServer


class RecordingDispatcher:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: List[NotifyRequest] = []

    def dispatch(self, request: NotifyRequest) -> None:
        self.requests.append(request)
        if self.error is not None:
            raise self.error


def _serve(socket_path: Path, dispatcher: RecordingDispatcher) -> NotifyServer:
    server = NotifyServer(socket_path, dispatcher)
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


def test_send_notification_round_trip(socket_dir: Path) -> None:
    socket_path = socket_dir / "notify.sock"
    dispatcher = RecordingDispatcher()
    server = _serve(socket_path, dispatcher)
    request = NotifyRequest.model_validate(
        {
            "title": "Example title",
            "message": "Example message.\nExample message.",
            "url": "https://example.com",
            "button": [
                {"label": "Open", "src": "https://example.com/open"},
                {"label": "Dismiss", "src": "https://example.com/dismiss"},
            ],
            "image": {"placement": "hero", "hintCrop": "circle", "src": "/a.png"},
        }
    )
    try:
        response = send_notification(socket_path, request)
    finally:
        server.shutdown()
        server.server_close()

    assert response == NotifyResponse.ok()
    assert dispatcher.requests == [request]


def test_send_notification_returns_error_response(socket_dir: Path) -> None:
    socket_path = socket_dir / "notify.sock"
    server = _serve(socket_path, RecordingDispatcher(DispatchError("boom")))
    try:
        response = send_notification(socket_path, NotifyRequest(title="T", message="M"))
    finally:
        server.shutdown()
        server.server_close()

    assert response.status == "error"
    assert response.error == "boom"


def test_send_notification_without_daemon(socket_dir: Path) -> None:
    with pytest.raises(NotifyClientError, match="daemon connection failed"):
        send_notification(
            socket_dir / "missing.sock", NotifyRequest(title="T", message="M")
        )


def test_send_notification_rejects_oversized_request(socket_dir: Path) -> None:
    request = NotifyRequest(title="T", message="x" * 5000)

    with pytest.raises(NotifyClientError, match="limit is 4096"):
        send_notification(socket_dir / "notify.sock", request)


def _serve_raw(socket_path: Path, reply: bytes) -> threading.Thread:
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(str(socket_path))
    listener.listen(1)

    def run() -> None:
        with listener:
            connection, _ = listener.accept()
            with connection:
                connection.recv(4096)
                if reply:
                    connection.sendall(reply)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread


def test_send_notification_empty_response(socket_dir: Path) -> None:
    socket_path = socket_dir / "empty.sock"
    thread = _serve_raw(socket_path, b"")

    with pytest.raises(NotifyClientError, match="empty daemon response"):
        send_notification(socket_path, NotifyRequest(title="T", message="M"))
    thread.join(timeout=1.0)


def test_send_notification_invalid_response(socket_dir: Path) -> None:
    socket_path = socket_dir / "garbage.sock"
    thread = _serve_raw(socket_path, b'{"status": "ok", "error": "contradiction"}')

    with pytest.raises(NotifyClientError, match="invalid daemon response"):
        send_notification(socket_path, NotifyRequest(title="T", message="M"))
    thread.join(timeout=1.0)
