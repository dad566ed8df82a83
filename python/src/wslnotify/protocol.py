"""Wire protocol for the notification socket.

One JSON request per connection, at most ``MAX_FRAME_SIZE`` bytes, answered
by one JSON response before the server closes the connection.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from wslnotify.models import NotifyRequest, NotifyResponse

MAX_FRAME_SIZE = 4096


class RequestDecodeError(RuntimeError):
    """Raised when a request frame cannot be decoded."""


def decode_request(raw: bytes) -> NotifyRequest:
    """Decode a request frame.

    :param raw: Bytes read from the connection.
    :type raw: bytes
    :return: Validated request.
    :rtype: NotifyRequest
    :raises RequestDecodeError: If the frame is not a valid request document.
    """
    try:
        payload = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as error:
        raise RequestDecodeError(f"request is not valid UTF-8: {error}") from error
    except json.JSONDecodeError as error:
        raise RequestDecodeError(f"request is not valid JSON: {error}") from error
    if not isinstance(payload, dict):
        raise RequestDecodeError("request must be a JSON object")
    try:
        return NotifyRequest.model_validate(payload)
    except ValidationError as error:
        raise RequestDecodeError(f"invalid request: {error}") from error


def encode_request(request: NotifyRequest) -> bytes:
    """Encode a request frame.

    :param request: Notification request.
    :type request: NotifyRequest
    :return: UTF-8 JSON bytes.
    :rtype: bytes
    """
    payload = request.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload).encode("utf-8")


def decode_response(raw: bytes) -> NotifyResponse:
    """Decode a response frame.

    :param raw: Bytes read from the connection.
    :type raw: bytes
    :return: Validated response.
    :rtype: NotifyResponse
    :raises ValueError: If the frame is not a valid response document.
    """
    return NotifyResponse.model_validate_json(raw)


def encode_response(response: NotifyResponse) -> bytes:
    """Encode a response frame.

    :param response: Response to send.
    :type response: NotifyResponse
    :return: UTF-8 JSON bytes.
    :rtype: bytes
    """
    return json.dumps(response.model_dump(mode="json", exclude_none=True)).encode(
        "utf-8"
    )
