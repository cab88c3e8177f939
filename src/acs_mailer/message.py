# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email message builder and its wire representation.

``EmailMessage`` accumulates sender, recipients, content, attachments and
custom headers, then renders the JSON body expected by the ``emails:send``
operation. Builder methods return the message so calls can be chained.

Example:
    Building a plain-text message::

        message = (
            EmailMessage(sender_address="noreply@example.com")
            .add_to("alice@example.com", "Alice")
            .set_subject("Hello")
            .set_body("Hi Alice")
        )
        body = message.serialize()
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import InputError


@dataclass
class EmailAddress:
    """A recipient or reply-to address.

    Attributes:
        address: Email address.
        display_name: Optional human-readable name.
    """

    address: str
    display_name: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"address": self.address, "displayName": self.display_name}


@dataclass
class EmailAttachment:
    """An attachment with its content already base64-encoded.

    Attributes:
        name: File name shown to the recipient.
        content_type: MIME type, e.g. ``application/pdf``.
        content_base64: Base64-encoded file content.
    """

    name: str
    content_type: str
    content_base64: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "contentType": self.content_type,
            "contentInBase64": self.content_base64,
        }


@dataclass
class EmailMessage:
    """Mutable email message, built incrementally before a send.

    Attributes:
        sender_address: Verified sender address of the ACS domain.
        subject: Subject line.
        body: Message body, HTML or plain text depending on ``is_html``.
        is_html: Send ``body`` as ``content.html`` instead of ``content.plainText``.
        to: Primary recipients.
        cc: Carbon copy recipients.
        bcc: Blind carbon copy recipients.
        reply_to: Reply-to addresses.
        attachments: File attachments.
        headers: Custom headers, name to value.
        user_engagement_tracking_disabled: Ask the service not to track opens/clicks.
    """

    sender_address: str = ""
    subject: str = ""
    body: str = ""
    is_html: bool = False
    to: list[EmailAddress] = field(default_factory=list)
    cc: list[EmailAddress] = field(default_factory=list)
    bcc: list[EmailAddress] = field(default_factory=list)
    reply_to: list[EmailAddress] = field(default_factory=list)
    attachments: list[EmailAttachment] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    user_engagement_tracking_disabled: bool = False

    # --- content ---

    def set_sender(self, address: str) -> EmailMessage:
        self.sender_address = address
        return self

    def set_subject(self, subject: str) -> EmailMessage:
        self.subject = subject
        return self

    def set_body(self, body: str, is_html: bool | None = None) -> EmailMessage:
        """Set the body, optionally switching between HTML and plain text."""
        self.body = body
        if is_html is not None:
            self.is_html = is_html
        return self

    # --- recipients ---

    def add_to(self, address: str, display_name: str = "") -> EmailMessage:
        self.to.append(EmailAddress(address, display_name))
        return self

    def add_cc(self, address: str, display_name: str = "") -> EmailMessage:
        self.cc.append(EmailAddress(address, display_name))
        return self

    def add_bcc(self, address: str, display_name: str = "") -> EmailMessage:
        self.bcc.append(EmailAddress(address, display_name))
        return self

    def add_reply_to(self, address: str, display_name: str = "") -> EmailMessage:
        self.reply_to.append(EmailAddress(address, display_name))
        return self

    # --- attachments and headers ---

    def add_attachment(self, attachment: EmailAttachment) -> EmailMessage:
        self.attachments.append(attachment)
        return self

    def add_attachment_file(
        self,
        path: str | Path,
        content_type: str | None = None,
    ) -> EmailMessage:
        """Read a file from disk and attach it.

        Raises:
            InputError: If the file cannot be read.
        """
        from .attachments import AttachmentReader

        return self.add_attachment(AttachmentReader().read(path, content_type=content_type))

    def add_header(self, name: str, value: str) -> EmailMessage:
        """Set a custom header; an existing header with the same name is replaced."""
        self.headers[name] = value
        return self

    # --- clearing ---

    def clear_to(self) -> EmailMessage:
        self.to = []
        return self

    def clear_cc(self) -> EmailMessage:
        self.cc = []
        return self

    def clear_bcc(self) -> EmailMessage:
        self.bcc = []
        return self

    def clear_reply_to(self) -> EmailMessage:
        self.reply_to = []
        return self

    def clear_attachments(self) -> EmailMessage:
        self.attachments = []
        return self

    def clear_headers(self) -> EmailMessage:
        self.headers = {}
        return self

    def clear_all_recipients(self) -> EmailMessage:
        """Clear to, cc and bcc. Reply-to addresses are kept."""
        return self.clear_to().clear_cc().clear_bcc()

    def reset(self) -> EmailMessage:
        """Restore every field to its default value."""
        self.clear_all_recipients().clear_reply_to().clear_headers().clear_attachments()
        self.sender_address = ""
        self.subject = ""
        self.body = ""
        self.is_html = False
        self.user_engagement_tracking_disabled = False
        return self

    @property
    def is_empty(self) -> bool:
        """True when no recipient, attachment or header is set."""
        return not (
            self.to or self.cc or self.bcc or self.reply_to or self.attachments or self.headers
        )

    # --- serialization ---

    def validate(self) -> None:
        """Check the fields required by the service.

        Raises:
            InputError: If the sender or every recipient list is missing.
        """
        if not self.sender_address:
            raise InputError("Sender address is required")
        if not (self.to or self.cc or self.bcc):
            raise InputError("At least one recipient (to, cc or bcc) is required")

    def to_payload(self) -> dict[str, Any]:
        """Build the ``emails:send`` request body as a dict."""
        content: dict[str, str] = {"subject": self.subject}
        if self.is_html:
            content["html"] = self.body
        else:
            content["plainText"] = self.body

        return {
            "senderAddress": self.sender_address,
            "content": content,
            "recipients": {
                "to": [a.to_dict() for a in self.to],
                "cc": [a.to_dict() for a in self.cc],
                "bcc": [a.to_dict() for a in self.bcc],
            },
            "headers": dict(self.headers) if self.headers else None,
            "replyTo": [a.to_dict() for a in self.reply_to],
            "attachments": [a.to_dict() for a in self.attachments],
            "userEngagementTrackingDisabled": (
                "true" if self.user_engagement_tracking_disabled else "false"
            ),
        }

    def serialize(self) -> bytes:
        """Render the payload as compact UTF-8 JSON.

        The output is byte-identical for an unchanged message; the content
        hash is computed over exactly these bytes.
        """
        return json.dumps(
            self.to_payload(), ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")
