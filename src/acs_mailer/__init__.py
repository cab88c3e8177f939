# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Client library for the Azure Communication Services email API.

Features:
    - HMAC-SHA256 request signing with the resource access key
    - Message builder for to/cc/bcc/reply-to, HTML or plain text, headers
    - File and inline base64 attachments with MIME type detection
    - Result objects for accepted, rejected and failed requests
    - Delivery status polling by operation id
    - INI/environment configuration and an ``acs-mailer`` CLI

Example::

    from acs_mailer import EmailClient, EmailMessage

    message = (
        EmailMessage(sender_address="noreply@example.com")
        .add_to("alice@example.com")
        .set_subject("Hello")
        .set_body("Hi Alice")
    )
    with EmailClient(endpoint, access_key) as client:
        result = client.send(message)
"""

from .attachments import AttachmentReader
from .client import EmailClient
from .config_loader import MailerConfig, load_mailer_config
from .errors import ConfigurationError, InputError, MailerError
from .mailer import Mailer
from .message import EmailAddress, EmailAttachment, EmailMessage
from .results import Accepted, RemoteError, StatusReport, TransportError

__all__ = [
    "Accepted",
    "AttachmentReader",
    "ConfigurationError",
    "EmailAddress",
    "EmailAttachment",
    "EmailClient",
    "EmailMessage",
    "InputError",
    "Mailer",
    "MailerConfig",
    "MailerError",
    "RemoteError",
    "StatusReport",
    "TransportError",
    "load_mailer_config",
]
