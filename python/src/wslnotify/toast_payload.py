"""Windows toast XML construction."""

from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape

from wslnotify.models import AudioSpec, ButtonSpec, ImageSpec, NotifyRequest

XML_DECLARATION = '<?xml version="1.0"?>'
DEFAULT_DURATION = "short"

_EXTRA_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    """Escape the five XML metacharacters.

    :param text: Raw text.
    :type text: str
    :return: Text safe for both attribute values and text nodes.
    :rtype: str
    """
    return escape(text, _EXTRA_ENTITIES)


def build_toast_xml(request: NotifyRequest, xml_declaration: bool = True) -> str:
    """Build a toast notification document from a request.

    :param request: Notification request.
    :type request: NotifyRequest
    :param xml_declaration: Whether to prefix the document with an XML declaration.
    :type xml_declaration: bool
    :return: Serialized toast document.
    :rtype: str
    """
    parts: List[str] = []
    if xml_declaration:
        parts.append(XML_DECLARATION)
    parts.append(
        '<toast activationType="protocol" launch="{launch}" duration="{duration}">'.format(
            launch=escape_xml(request.url or ""),
            duration=escape_xml(request.duration or DEFAULT_DURATION),
        )
    )
    parts.append(_build_visual(request))
    if request.button:
        parts.append(_build_actions(request.button))
    if request.audio is not None:
        parts.append(_build_audio(request.audio))
    parts.append("</toast>")
    return "".join(parts)


def _build_visual(request: NotifyRequest) -> str:
    binding: List[str] = ['<binding template="ToastGeneric">']
    if request.image is not None:
        binding.append(_build_image(request.image))
    binding.append(f"<text>{escape_xml(request.title)}</text>")
    binding.append(f"<text>{escape_xml(request.message)}</text>")
    if request.attribution is not None:
        binding.append(
            f'<text placement="attribution">{escape_xml(request.attribution)}</text>'
        )
    binding.append("</binding>")
    return "<visual>" + "".join(binding) + "</visual>"


def _build_image(image: ImageSpec) -> str:
    attributes = [f'placement="{escape_xml(image.placement)}"']
    if image.hint_crop is not None:
        attributes.append(f'hint-crop="{escape_xml(image.hint_crop)}"')
    attributes.append(f'src="{escape_xml(image.src)}"')
    return "<image " + " ".join(attributes) + "/>"


def _build_actions(buttons: List[ButtonSpec]) -> str:
    actions = [
        '<action content="{label}" activationType="protocol" arguments="{src}"/>'.format(
            label=escape_xml(button.label),
            src=escape_xml(button.src),
        )
        for button in buttons
    ]
    return "<actions>" + "".join(actions) + "</actions>"


def _build_audio(audio: AudioSpec) -> str:
    return '<audio src="{src}" loop="{loop}" silent="{silent}"/>'.format(
        src=escape_xml(audio.src or ""),
        loop=_format_bool(audio.loop),
        silent=_format_bool(audio.silent),
    )


def _format_bool(value: object) -> str:
    return "true" if value else "false"
