"""Tests for the wire protocol codec."""

from __future__ import annotations

import json

import pytest

from wslnotify.models import NotifyRequest, NotifyResponse
from wslnotify.protocol import (
    RequestDecodeError,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)


def test_decode_request() -> None:
    request = decode_request(
        b'{"title": "T", "message": "M", "url": "https://example.com"}'
    )
    assert request == NotifyRequest(title="T", message="M", url="https://example.com")


def test_decode_request_rejects_invalid_json() -> None:
    with pytest.raises(RequestDecodeError, match="not valid JSON"):
        decode_request(b'{"title": ')


def test_decode_request_rejects_invalid_utf8() -> None:
    with pytest.raises(RequestDecodeError, match="UTF-8"):
        decode_request(b"\xff\xfe")


def test_decode_request_rejects_non_object() -> None:
    with pytest.raises(RequestDecodeError, match="JSON object"):
        decode_request(b'["title", "message"]')


def test_decode_request_rejects_missing_fields() -> None:
    with pytest.raises(RequestDecodeError, match="message"):
        decode_request(b'{"title": "T"}')


def test_encode_request_uses_wire_names_and_omits_unset_fields() -> None:
    request = NotifyRequest.model_validate(
        {
            "title": "T",
            "message": "M",
            "image": {"placement": "hero", "hintCrop": "circle", "src": "/a.png"},
        }
    )

    payload = json.loads(encode_request(request))

    assert payload == {
        "title": "T",
        "message": "M",
        "image": {"placement": "hero", "hintCrop": "circle", "src": "/a.png"},
    }


def test_request_survives_encode_and_decode() -> None:
    request = NotifyRequest.model_validate(
        {
            "title": "Build & test",
            "message": "line one\nline two",
            "url": "https://example.com",
            "attribution": "via WSL",
            "button": [{"label": "Open", "src": "https://example.com/open"}],
            "image": {"placement": "appLogoOverride", "src": "C:\\a.png"},
            "audio": {"src": "ms-winsoundevent:Notification.Mail", "loop": False},
            "duration": "long",
        }
    )

    assert decode_request(encode_request(request)) == request


def test_encode_ok_response() -> None:
    assert json.loads(encode_response(NotifyResponse.ok())) == {"status": "ok"}


def test_encode_error_response() -> None:
    assert json.loads(encode_response(NotifyResponse.failure("boom"))) == {
        "status": "error",
        "error": "boom",
    }


def test_decode_response() -> None:
    assert decode_response(b'{"status": "error", "error": "boom"}') == (
        NotifyResponse.failure("boom")
    )
