"""Notification request and response models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ButtonSpec(BaseModel):
    """Toast action button.

    :param label: Text shown on the button.
    :type label: str
    :param src: Activation target passed when the button is clicked.
    :type src: str
    """

    model_config = ConfigDict(frozen=True)

    label: str
    src: str


class ImageSpec(BaseModel):
    """Toast image.

    :param placement: Where the image is shown.
    :type placement: str
    :param hint_crop: Optional crop hint.
    :type hint_crop: Optional[str]
    :param src: Image path, either a Linux or a Windows path.
    :type src: str
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    placement: Literal["appLogoOverride", "hero"]
    hint_crop: Optional[Literal["circle"]] = Field(default=None, alias="hintCrop")
    src: str


class AudioSpec(BaseModel):
    """Toast audio settings."""

    model_config = ConfigDict(frozen=True)

    src: Optional[str] = None
    loop: Optional[bool] = None
    silent: Optional[bool] = None


class NotifyRequest(BaseModel):
    """Notification request received from a client.

    :param title: Toast title line.
    :type title: str
    :param message: Toast body line.
    :type message: str
    :param url: Activation target for the toast itself.
    :type url: Optional[str]
    :param attribution: Small print line.
    :type attribution: Optional[str]
    :param button: Action buttons in display order.
    :type button: Optional[List[ButtonSpec]]
    :param image: Optional image.
    :type image: Optional[ImageSpec]
    :param audio: Optional audio settings.
    :type audio: Optional[AudioSpec]
    :param duration: Display duration.
    :type duration: Optional[str]
    """

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    url: Optional[str] = None
    attribution: Optional[str] = None
    button: Optional[List[ButtonSpec]] = None
    image: Optional[ImageSpec] = None
    audio: Optional[AudioSpec] = None
    duration: Optional[Literal["long", "short"]] = None


class NotifyResponse(BaseModel):
    """Response returned to the client once per request."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok", "error"]
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_error_matches_status(self) -> "NotifyResponse":
        if self.status == "error" and self.error is None:
            raise ValueError("error responses require an error message")
        if self.status == "ok" and self.error is not None:
            raise ValueError("ok responses must not carry an error message")
        return self

    @classmethod
    def ok(cls) -> "NotifyResponse":
        """Build a success response.

        :return: Response with status ok.
        :rtype: NotifyResponse
        """
        return cls(status="ok")

    @classmethod
    def failure(cls, message: str) -> "NotifyResponse":
        """Build an error response.

        :param message: Human readable diagnostic.
        :type message: str
        :return: Response with status error.
        :rtype: NotifyResponse
        """
        return cls(status="error", error=message)
