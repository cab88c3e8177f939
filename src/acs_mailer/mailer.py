# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Stateful mailer facade.

``Mailer`` keeps one ``EmailMessage`` being built and the outcome of the
last send, for callers that prefer a set/send/check-error workflow over
passing messages and results around explicitly.

Example:
    Sending and checking the result::

        with Mailer.create(endpoint, access_key) as mailer:
            mailer.set_from("noreply@example.com")
            mailer.add_address("alice@example.com", "Alice")
            mailer.subject = "Hello"
            mailer.body = "<p>Hi</p>"
            mailer.is_html(True)
            if not mailer.send():
                print(mailer.error)
"""

from __future__ import annotations

from pathlib import Path

from .attachments import AttachmentReader
from .client import EmailClient
from .message import EmailMessage
from .results import ErrorResult, SendResult, StatusResult


class Mailer:
    """Builds one message at a time and remembers the last send outcome.

    Attributes:
        client: Client used for every request.
        message: Message currently being built.
    """

    def __init__(
        self,
        client: EmailClient,
        attachment_reader: AttachmentReader | None = None,
    ):
        self.client = client
        self.message = EmailMessage()
        self._reader = attachment_reader or AttachmentReader()
        self._operation_id = ""
        self._error: ErrorResult | None = None
        self._last_result: SendResult | None = None

    @classmethod
    def create(cls, endpoint: str, access_key: str, **client_options) -> Mailer:
        """Create a mailer with its own ``EmailClient``."""
        return cls(EmailClient(endpoint, access_key, **client_options))

    # --- content ---

    @property
    def subject(self) -> str:
        return self.message.subject

    @subject.setter
    def subject(self, value: str) -> None:
        self.message.subject = value

    @property
    def body(self) -> str:
        return self.message.body

    @body.setter
    def body(self, value: str) -> None:
        self.message.body = value

    def is_html(self, is_html: bool) -> None:
        self.message.is_html = is_html

    def set_from(self, address: str) -> None:
        self.message.sender_address = address

    # --- recipients, attachments, headers ---

    def add_address(self, address: str, display_name: str = "") -> None:
        self.message.add_to(address, display_name)

    def add_cc(self, address: str, display_name: str = "") -> None:
        self.message.add_cc(address, display_name)

    def add_bcc(self, address: str, display_name: str = "") -> None:
        self.message.add_bcc(address, display_name)

    def add_reply_to(self, address: str, display_name: str = "") -> None:
        self.message.add_reply_to(address, display_name)

    def add_attachment(self, path: str | Path, content_type: str | None = None) -> None:
        """Read ``path`` and attach it; raises ``InputError`` if unreadable."""
        self.message.add_attachment(self._reader.read(path, content_type=content_type))

    def add_custom_header(self, name: str, value: str) -> None:
        self.message.add_header(name, value)

    def clear_addresses(self) -> None:
        self.message.clear_to()

    def clear_ccs(self) -> None:
        self.message.clear_cc()

    def clear_bccs(self) -> None:
        self.message.clear_bcc()

    def clear_reply_tos(self) -> None:
        self.message.clear_reply_to()

    def clear_attachments(self) -> None:
        self.message.clear_attachments()

    def clear_all_recipients(self) -> None:
        self.message.clear_all_recipients()

    def clear_custom_headers(self) -> None:
        self.message.clear_headers()

    def reset(self) -> None:
        """Clear the message, the last operation id and the last error."""
        self.message.reset()
        self._operation_id = ""
        self._error = None
        self._last_result = None

    # --- operations ---

    def send(self) -> bool:
        """Send the current message.

        On success the operation id is stored and the error cleared. On
        failure the error is stored and the previous operation id is kept.

        Raises:
            InputError: If the message lacks a sender or recipients.
        """
        result = self.client.send(self.message)
        self._last_result = result
        if result.ok:
            self._operation_id = result.operation_id
            self._error = None
        else:
            self._error = result
        return result.ok

    def get_send_status(self, operation_id: str | None = None) -> StatusResult:
        """Query the status of ``operation_id`` (default: the last accepted send)."""
        return self.client.get_send_status(operation_id or self._operation_id)

    @property
    def operation_id(self) -> str:
        """Operation id of the last accepted send, or an empty string."""
        return self._operation_id

    @property
    def error(self) -> ErrorResult | None:
        """Error of the last failed send, or None."""
        return self._error

    @property
    def last_result(self) -> SendResult | None:
        return self._last_result

    def has_error(self) -> bool:
        return self._error is not None

    # --- lifecycle ---

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Mailer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
