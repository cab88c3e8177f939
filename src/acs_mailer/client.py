# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for the Azure Communication Services email API.

``EmailClient`` signs and dispatches the two email operations:

- ``send``: ``POST /emails:send`` with a serialized ``EmailMessage``
- ``get_send_status``: ``GET /emails/operations/{id}``

Both return a result object (see :mod:`acs_mailer.results`) instead of
raising on service or transport failures. Exceptions are raised only for
problems detected before the request is sent (bad key, bad endpoint,
invalid message).

The client owns one ``requests.Session``; close it with ``close()`` or use
the client as a context manager.

Usage:
    >>> from acs_mailer import EmailClient, EmailMessage
    >>> message = EmailMessage(sender_address="noreply@example.com").add_to("a@x.com")
    >>> with EmailClient("https://res.communication.azure.com", access_key) as client:
    ...     result = client.send(message)
    ...     if result.ok:
    ...         print(client.get_send_status(result.operation_id))
"""

from __future__ import annotations

from urllib.parse import quote

import requests

from .config_loader import DEFAULT_API_VERSION, DEFAULT_TIMEOUT_SECONDS, MailerConfig
from .errors import ConfigurationError, InputError, MailerError
from .logger import get_logger
from .message import EmailMessage
from .results import (
    SendResult,
    StatusResult,
    interpret_send_response,
    interpret_status_response,
    transport_error_from_exception,
)
from .signing import decode_access_key, get_uri_authority, sign_request

logger = get_logger("client")

SEND_PATH = "/emails:send"
STATUS_PATH = "/emails/operations/{operation_id}"


class EmailClient:
    """Signed client for one Communication Services resource.

    Attributes:
        endpoint: Resource endpoint without trailing slash.
        api_version: Email API version used in every request.
        timeout: Request timeout in seconds.
        verify_ssl: Whether TLS certificates are verified.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        verify_ssl: bool = True,
    ):
        """Initialize the client and acquire its HTTP session.

        Args:
            endpoint: Resource endpoint, e.g. https://name.communication.azure.com
            access_key: Base64 access key of the resource.
            api_version: Email API version.
            timeout: Request timeout in seconds.
            verify_ssl: Verify the server TLS certificate.

        Raises:
            ConfigurationError: If the endpoint or access key is invalid.
        """
        if not endpoint:
            raise ConfigurationError("Endpoint is required")
        self.endpoint = endpoint.rstrip("/")
        get_uri_authority(self.endpoint)
        decode_access_key(access_key)
        self._access_key = access_key.strip()
        self.api_version = api_version
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session: requests.Session | None = requests.Session()

    @classmethod
    def from_config(cls, config: MailerConfig) -> EmailClient:
        """Create a client from a loaded ``MailerConfig``.

        Raises:
            ConfigurationError: If endpoint or access key is missing.
        """
        if not config.is_complete:
            raise ConfigurationError("Both endpoint and access key must be configured")
        return cls(
            endpoint=config.endpoint or "",
            access_key=config.access_key or "",
            api_version=config.api_version,
            timeout=config.timeout_seconds,
            verify_ssl=config.verify_ssl,
        )

    # --- lifecycle ---

    @property
    def closed(self) -> bool:
        return self._session is None

    def close(self) -> None:
        """Release the HTTP session. Safe to call more than once."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> EmailClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- operations ---

    def send_path(self) -> str:
        """Path and query of the send operation."""
        return f"{SEND_PATH}?api-version={self.api_version}"

    def status_path(self, operation_id: str) -> str:
        """Path and query of the status operation for ``operation_id``."""
        path = STATUS_PATH.format(operation_id=quote(operation_id, safe=""))
        return f"{path}?api-version={self.api_version}"

    def send(self, message: EmailMessage) -> SendResult:
        """Submit a message for delivery.

        Args:
            message: Fully populated message.

        Returns:
            ``Accepted`` on HTTP 202, otherwise ``RemoteError`` or ``TransportError``.

        Raises:
            InputError: If the message lacks a sender or recipients.
            MailerError: If the client has been closed.
        """
        message.validate()
        body = message.serialize()
        response = self._request("POST", self.send_path(), body)
        if not isinstance(response, requests.Response):
            return response

        result = interpret_send_response(response)
        if result.ok:
            logger.info(f"Email accepted, operation id {result.operation_id}")
        else:
            logger.warning(
                f"Email rejected with HTTP {response.status_code}: {result.code} {result.message}"
            )
        return result

    def get_send_status(self, operation_id: str) -> StatusResult:
        """Query the delivery status of a submitted message.

        Args:
            operation_id: Identifier returned by ``send``.

        Returns:
            ``StatusReport`` on any 2xx, otherwise ``RemoteError`` or ``TransportError``.

        Raises:
            InputError: If ``operation_id`` is empty.
            MailerError: If the client has been closed.
        """
        if not operation_id:
            raise InputError("Operation id is required")
        response = self._request("GET", self.status_path(operation_id), b"")
        if not isinstance(response, requests.Response):
            return response

        result = interpret_status_response(response)
        if not result.ok:
            logger.warning(
                f"Status query for {operation_id} failed with HTTP {response.status_code}: {result.code}"
            )
        return result

    def _request(self, method: str, path_and_query: str, body: bytes):
        """Sign and send one request.

        Returns:
            The ``requests.Response``, or a ``TransportError`` if no
            response was obtained.
        """
        if self._session is None:
            raise MailerError("Client is closed")

        headers = sign_request(method, path_and_query, self.endpoint, body, self._access_key)
        url = f"{self.endpoint}{path_and_query}"
        logger.debug(f"{method} {url}")
        try:
            return self._session.request(
                method,
                url,
                data=body if body else None,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            error = transport_error_from_exception(e)
            logger.error(f"{method} {url} failed: {error.code} {error.message}")
            return error

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<EmailClient '{self.endpoint}' ({state})>"
