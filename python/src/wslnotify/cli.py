"""wsl-notify CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from wslnotify.client import NotifyClientError, send_notification
from wslnotify.config import DEFAULT_SOCKET_PATH, SOCKET_PATH_ENVIRONMENT_VARIABLE
from wslnotify.config_loader import ConfigurationError
from wslnotify.daemon import start_daemon
from wslnotify.models import NotifyRequest
from wslnotify.server import ServerStartupError
from wslnotify.toast_payload import build_toast_xml


def request_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the notification request options to a command."""
    options = [
        click.argument("title"),
        click.argument("message"),
        click.option("--url", help="Target opened when the toast is clicked."),
        click.option("--attribution", help="Small print line."),
        click.option(
            "--button",
            "buttons",
            multiple=True,
            metavar="LABEL=TARGET",
            help="Action button, repeatable.",
        ),
        click.option("--image", help="Image path (WSL or Windows)."),
        click.option(
            "--placement",
            type=click.Choice(["appLogoOverride", "hero"]),
            default="appLogoOverride",
            show_default=True,
        ),
        click.option("--hint-crop", type=click.Choice(["circle"])),
        click.option("--audio", help="Audio source such as ms-winsoundevent:..."),
        click.option("--loop", is_flag=True),
        click.option("--silent", is_flag=True),
        click.option("--duration", type=click.Choice(["short", "long"])),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_request(
    title: str,
    message: str,
    url: Optional[str],
    attribution: Optional[str],
    buttons: tuple[str, ...],
    image: Optional[str],
    placement: str,
    hint_crop: Optional[str],
    audio: Optional[str],
    loop: bool,
    silent: bool,
    duration: Optional[str],
) -> NotifyRequest:
    """Build a notification request from CLI options.

    :return: Notification request.
    :rtype: NotifyRequest
    :raises click.BadParameter: If a button is not in LABEL=TARGET form.
    """
    payload: Dict[str, Any] = {
        "title": title,
        "message": message,
        "url": url,
        "attribution": attribution,
        "duration": duration,
    }
    if buttons:
        payload["button"] = [_parse_button(value) for value in buttons]
    if image:
        payload["image"] = {"placement": placement, "hintCrop": hint_crop, "src": image}
    if audio is not None or loop or silent:
        payload["audio"] = {"src": audio, "loop": loop, "silent": silent}
    return NotifyRequest.model_validate(payload)


def _parse_button(value: str) -> Dict[str, str]:
    label, separator, target = value.partition("=")
    if not separator or not label:
        raise click.BadParameter(
            f"expected LABEL=TARGET, got {value!r}", param_hint="--button"
        )
    return {"label": label, "src": target}


@click.group()
def cli() -> None:
    """wsl-notify command line interface."""


@cli.command("serve")
@click.option("--socket", "socket_path", help="Socket path override.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="YAML configuration file.",
)
@click.option("--log-level", default="INFO", show_default=True)
def serve(socket_path: Optional[str], config_path: Optional[Path], log_level: str) -> None:
    """Run the notification daemon.

    :param socket_path: Socket path override.
    :type socket_path: Optional[str]
    :param config_path: YAML configuration file.
    :type config_path: Optional[Path]
    :param log_level: Log level name.
    :type log_level: str
    """
    try:
        start_daemon(socket_path, config_path, log_level)
    except (ConfigurationError, ServerStartupError) as error:
        raise click.ClickException(str(error)) from error


@cli.command("send")
@request_options
@click.option(
    "--socket",
    "socket_path",
    envvar=SOCKET_PATH_ENVIRONMENT_VARIABLE,
    default=DEFAULT_SOCKET_PATH,
    show_default=True,
)
@click.pass_context
def send(ctx: click.Context, socket_path: str, **options: Any) -> None:
    """Send a notification to the running daemon.

    :param socket_path: Daemon socket path.
    :type socket_path: str
    """
    request = build_request(**options)
    try:
        response = send_notification(Path(socket_path), request)
    except NotifyClientError as error:
        raise click.ClickException(str(error)) from error
    click.echo(json.dumps(response.model_dump(mode="json", exclude_none=True)))
    if response.status == "error":
        ctx.exit(1)


@cli.command("preview")
@request_options
@click.option("--no-declaration", is_flag=True, help="Omit the XML declaration.")
def preview(no_declaration: bool, **options: Any) -> None:
    """Print the toast document for a notification without sending it."""
    request = build_request(**options)
    click.echo(build_toast_xml(request, xml_declaration=not no_declaration))
