"""Behave steps for notification server scenarios."""

from __future__ import annotations

import json
import socket
import threading
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List

from behave import given, then, when

from wslnotify.asset_relocation import AssetRelocator
from wslnotify.dispatcher import NotificationDispatcher
from wslnotify.notification_sink import SinkOutcome
from wslnotify.server import NotifyServer

SINK_TEMP_DIRECTORY = "C:\\Temp"


class _RecordingSink:
    def __init__(self) -> None:
        self.outcome = SinkOutcome(exit_status=0)
        self.documents: List[str] = []

    def show(self, document: str) -> SinkOutcome:
        self.documents.append(document)
        return self.outcome


class _TempDirectoryTranslator:
    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def sink_temp_directory(self) -> str:
        return SINK_TEMP_DIRECTORY

    def to_caller_namespace(self, path: str) -> str:
        return str(self.directory)

    def to_sink_namespace(self, path: str) -> str:
        return SINK_TEMP_DIRECTORY + "\\" + Path(path).name


def _exchange(context: object, payload: bytes) -> None:
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.settimeout(2.0)
        sock.connect(str(context.socket_path))
        if payload:
            sock.sendall(payload)
        sock.shutdown(socket.SHUT_WR)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    context.response_raw = b"".join(chunks)


def _response(context: object) -> dict:
    return json.loads(context.response_raw)


def _toast(context: object) -> ElementTree.Element:
    assert len(context.sink.documents) == 1, context.sink.documents
    document = context.sink.documents[0]
    return ElementTree.fromstring(document.removeprefix('<?xml version="1.0"?>'))


@given("a notification server with a working sink")
def given_server(context: object) -> None:
    assets_dir = context.temp_dir / "assets"
    assets_dir.mkdir()
    context.sink = _RecordingSink()
    dispatcher = NotificationDispatcher(
        context.sink, AssetRelocator(_TempDirectoryTranslator(assets_dir))
    )
    context.server = NotifyServer(context.socket_path, dispatcher)
    context.server_thread = threading.Thread(
        target=context.server.serve_forever, daemon=True
    )
    context.server_thread.start()


@given('the sink fails with exit code {code:d} and stderr "{stderr}"')
def given_sink_fails(context: object, code: int, stderr: str) -> None:
    context.sink.outcome = SinkOutcome(exit_status=code, stderr=stderr.encode("utf-8"))


@when("a client sends the request {payload}")
def when_client_sends_request(context: object, payload: str) -> None:
    _exchange(context, payload.encode("utf-8"))


@when('a client sends the raw bytes "{payload}"')
def when_client_sends_raw(context: object, payload: str) -> None:
    _exchange(context, payload.encode("utf-8"))


@when("a client connects and closes without sending")
def when_client_sends_nothing(context: object) -> None:
    _exchange(context, b"")


@then('the response status is "{status}"')
def then_response_status(context: object, status: str) -> None:
    assert _response(context)["status"] == status, context.response_raw


@then("the response has no error")
def then_response_has_no_error(context: object) -> None:
    assert "error" not in _response(context)


@then('the response error contains "{text}"')
def then_response_error_contains(context: object, text: str) -> None:
    assert text in _response(context)["error"]


@then("the client receives no response")
def then_no_response(context: object) -> None:
    assert context.response_raw == b""


@then("the sink showed no toast")
def then_no_toast(context: object) -> None:
    assert context.sink.documents == []


@then('the sink showed a toast with texts "{first}" and "{second}"')
def then_toast_texts(context: object, first: str, second: str) -> None:
    texts = [element.text for element in _toast(context).iter("text")]
    assert texts == [first, second], texts


@then("the toast has no image, actions or audio")
def then_toast_is_plain(context: object) -> None:
    toast = _toast(context)
    assert toast.find(".//image") is None
    assert toast.find("actions") is None
    assert toast.find("audio") is None
    assert toast.get("launch") == ""
    assert toast.get("duration") == "short"


@then('the toast launch attribute is "{launch}"')
def then_toast_launch(context: object, launch: str) -> None:
    assert _toast(context).get("launch") == launch


@then('the toast document contains "{text}"')
def then_document_contains(context: object, text: str) -> None:
    _toast(context)
    assert text in context.sink.documents[0]


@then('the toast document does not contain "{text}"')
def then_document_does_not_contain(context: object, text: str) -> None:
    _toast(context)
    assert text not in context.sink.documents[0]


@then("the toast actions are {labels}")
def then_toast_actions(context: object, labels: str) -> None:
    expected = [label.strip().strip('"') for label in labels.split(",")]
    actions = _toast(context).findall("actions/action")
    assert [action.get("content") for action in actions] == expected
