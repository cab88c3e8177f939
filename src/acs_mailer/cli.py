# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for acs-mailer.

Sends an email or queries a delivery status using the settings loaded by
:func:`acs_mailer.config_loader.load_mailer_config`.

Usage:
    acs-mailer send --from noreply@example.com --to alice@example.com \\
        --subject "Report" --body-file report.html --html --attach report.pdf
    acs-mailer status 0a1b2c3d-operation-id
    acs-mailer --log-level DEBUG status 0a1b2c3d-operation-id --config /etc/acs-mailer.ini

Exit codes:
    0 on success, 1 when the service or the transport reports an error,
    2 for configuration or input problems.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from .attachments import AttachmentReader
from .client import EmailClient
from .config_loader import MailerConfig, load_mailer_config
from .errors import MailerError
from .message import EmailMessage
from .results import ErrorResult

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def describe_error(error: ErrorResult) -> str:
    """One-line description of a remote or transport error."""
    return f"{error.code}: {error.message}"


def parse_header(value: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` header option."""
    name, sep, header_value = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint="--header")
    return name.strip(), header_value.strip()


def _load_config(config_path: str | None) -> MailerConfig:
    config = load_mailer_config(config_path)
    if not config.is_complete:
        print_error(
            "Endpoint and access key are required "
            "(set ACS_MAILER_ENDPOINT / ACS_MAILER_ACCESS_KEY or use --config)"
        )
        sys.exit(2)
    return config


config_option = click.option(
    "--config", "-c", "config_path", type=click.Path(dir_okay=False), default=None,
    help="Path to config.ini with a [mailer] section.",
)


@click.group()
@click.version_option(package_name="acs-mailer")
@click.option(
    "--log-level", default="WARNING", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level.",
)
def main(log_level: str) -> None:
    """Send emails through Azure Communication Services."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("send")
@click.option("--from", "sender", required=True, help="Sender address.")
@click.option("--to", "to", multiple=True, help="Recipient address (repeatable).")
@click.option("--cc", "cc", multiple=True, help="CC address (repeatable).")
@click.option("--bcc", "bcc", multiple=True, help="BCC address (repeatable).")
@click.option("--reply-to", "reply_to", multiple=True, help="Reply-to address (repeatable).")
@click.option("--subject", "-s", default="", help="Subject line.")
@click.option("--body", "-b", default=None, help="Message body.")
@click.option("--body-file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Read the body from a file.")
@click.option("--html", is_flag=True, help="Send the body as HTML.")
@click.option("--attach", "-a", "attachments", multiple=True, help="File to attach (repeatable).")
@click.option("--header", "-H", "headers", multiple=True, help="Custom header NAME=VALUE (repeatable).")
@click.option("--disable-tracking", is_flag=True, help="Disable user engagement tracking.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@config_option
def send_command(
    sender: str,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    reply_to: tuple[str, ...],
    subject: str,
    body: str | None,
    body_file: str | None,
    html: bool,
    attachments: tuple[str, ...],
    headers: tuple[str, ...],
    disable_tracking: bool,
    as_json: bool,
    config_path: str | None,
) -> None:
    """Send an email."""
    if body is not None and body_file is not None:
        raise click.UsageError("Use either --body or --body-file, not both")
    if body_file is not None:
        body = Path(body_file).read_text(encoding="utf-8")

    config = _load_config(config_path)
    reader = AttachmentReader(base_dir=config.attachments_dir)

    message = EmailMessage(
        sender_address=sender,
        subject=subject,
        body=body or "",
        is_html=html,
        user_engagement_tracking_disabled=disable_tracking,
    )
    for address in to:
        message.add_to(address)
    for address in cc:
        message.add_cc(address)
    for address in bcc:
        message.add_bcc(address)
    for address in reply_to:
        message.add_reply_to(address)
    for header in headers:
        message.add_header(*parse_header(header))

    try:
        for path in attachments:
            message.add_attachment(reader.read(path))
        with EmailClient.from_config(config) as client:
            result = client.send(message)
    except MailerError as e:
        print_error(str(e))
        sys.exit(2)

    if not result.ok:
        if as_json:
            print_json({"ok": False, "code": result.code, "message": result.message})
        print_error(describe_error(result))
        sys.exit(1)

    if as_json:
        print_json({"ok": True, "operation_id": result.operation_id})
    else:
        print_success(f"Email accepted, operation id: {result.operation_id}")


@main.command("status")
@click.argument("operation_id")
@config_option
def status_command(operation_id: str, config_path: str | None) -> None:
    """Show the delivery status of OPERATION_ID."""
    config = _load_config(config_path)
    try:
        with EmailClient.from_config(config) as client:
            result = client.get_send_status(operation_id)
    except MailerError as e:
        print_error(str(e))
        sys.exit(2)

    if not result.ok:
        print_error(describe_error(result))
        sys.exit(1)
    print_json(result.payload)


if __name__ == "__main__":
    main()
