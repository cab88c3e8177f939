# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised before a request reaches the network.

Failures reported by the service or by the HTTP transport are not raised:
they come back as ``RemoteError`` / ``TransportError`` results
(see :mod:`acs_mailer.results`).
"""


class MailerError(Exception):
    """Base class for all exceptions raised by acs_mailer."""


class ConfigurationError(MailerError):
    """Invalid client configuration (access key, endpoint, settings)."""


class InputError(MailerError):
    """Invalid caller input (message fields, attachments, operation id)."""
