# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment loading for outgoing messages.

This module turns files, raw bytes or inline base64 strings into
``EmailAttachment`` objects ready to be serialized. Reading happens before
the send call so that missing or unreadable files surface as ``InputError``
without any network activity.

Security: when ``base_dir`` is configured, relative paths are resolved
against it and any path resolving outside of it is rejected.

Example:
    Attaching a report::

        reader = AttachmentReader(base_dir="/var/reports")
        attachment = reader.read("2026/october.pdf")
        # attachment.content_type == "application/pdf"
"""

from __future__ import annotations

import base64
import binascii
import mimetypes
from pathlib import Path

from .errors import InputError
from .message import EmailAttachment

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class AttachmentReader:
    """Builds attachments from the filesystem or from in-memory content.

    Attributes:
        _base_dir: Base directory for relative paths and security boundary.
    """

    def __init__(self, base_dir: str | Path | None = None):
        """Initialize the reader.

        Args:
            base_dir: Base directory for relative paths. If provided, all
                paths (including absolute ones) must resolve inside it. If
                None, relative paths are resolved against the working
                directory and no boundary is enforced.
        """
        self._base_dir: Path | None = None
        if base_dir:
            self._base_dir = Path(base_dir).resolve()

    @property
    def base_dir(self) -> Path | None:
        """The configured base directory."""
        return self._base_dir

    @staticmethod
    def guess_mime(filename: str) -> str:
        """Guess the MIME type from the file extension.

        Falls back to ``application/octet-stream`` for unknown extensions.
        """
        mt, _ = mimetypes.guess_type(filename)
        return mt or DEFAULT_CONTENT_TYPE

    def read(
        self,
        path: str | Path,
        content_type: str | None = None,
        name: str | None = None,
    ) -> EmailAttachment:
        """Read a file and build an attachment.

        Args:
            path: File path (absolute, or relative to ``base_dir``).
            content_type: MIME type; guessed from the extension when omitted.
            name: Attachment name; defaults to the file's base name.

        Raises:
            InputError: If the path is invalid, escapes ``base_dir``, or the
                file cannot be read.
        """
        resolved = self._resolve_and_validate(path)
        try:
            content = resolved.read_bytes()
        except OSError as e:
            raise InputError(f"Cannot read attachment {resolved}: {e}") from e
        return self.from_bytes(name or resolved.name, content, content_type)

    def from_bytes(
        self,
        name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> EmailAttachment:
        """Build an attachment from raw bytes."""
        if not name:
            raise InputError("Attachment name is required")
        return EmailAttachment(
            name=name,
            content_type=content_type or self.guess_mime(name),
            content_base64=base64.b64encode(content).decode("ascii"),
        )

    def from_base64(
        self,
        name: str,
        content_base64: str,
        content_type: str | None = None,
    ) -> EmailAttachment:
        """Build an attachment from content that is already base64-encoded.

        Whitespace is stripped and missing padding is added before strict
        validation; the normalized string is what gets sent.

        Raises:
            InputError: If the content is empty or not valid base64.
        """
        content = (content_base64 or "").strip()
        if not content:
            raise InputError(f"Attachment {name!r} has no content")
        padding_needed = 4 - (len(content) % 4)
        if padding_needed != 4:
            content += "=" * padding_needed
        try:
            base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InputError(f"Invalid base64 content for attachment {name!r}: {e}") from e
        return EmailAttachment(
            name=name,
            content_type=content_type or self.guess_mime(name),
            content_base64=content,
        )

    def _resolve_and_validate(self, path: str | Path) -> Path:
        """Resolve path and validate it's safe to read.

        Raises:
            InputError: If path is empty, escapes base_dir, or is not a file.
        """
        if not str(path):
            raise InputError("Empty attachment path provided")

        path_obj = Path(path)
        if path_obj.is_absolute() or not self._base_dir:
            resolved = path_obj.resolve()
        else:
            resolved = (self._base_dir / path_obj).resolve()

        if self._base_dir:
            try:
                resolved.relative_to(self._base_dir)
            except ValueError:
                raise InputError(
                    f"Path traversal detected: '{path}' resolves outside base directory"
                ) from None

        if not resolved.exists():
            raise InputError(f"Attachment not found: {resolved}")
        if not resolved.is_file():
            raise InputError(f"Attachment is not a regular file: {resolved}")
        return resolved
