# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HMAC-SHA256 request signing for the Azure Communication Services API.

Every request carries four authentication headers:

- ``x-ms-date``: request time in RFC 1123 format (GMT)
- ``x-ms-content-sha256``: base64 SHA-256 of the exact body bytes
- ``host``: authority of the endpoint (host plus explicit port)
- ``Authorization``: HMAC-SHA256 of the string to sign, keyed with the
  base64-decoded access key

The string to sign is a fixed external format::

    <VERB>\\n<path and query>\\n<x-ms-date>;<host>;<x-ms-content-sha256>

See https://learn.microsoft.com/en-us/rest/api/communication/authentication

Example:
    Signing a status request::

        headers = sign_request(
            "GET",
            "/emails/operations/op-1?api-version=2023-03-31",
            "https://res.communication.azure.com",
            b"",
            access_key,
        )
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass
from email.utils import formatdate
from urllib.parse import urlsplit

from .errors import ConfigurationError

SIGNED_HEADERS = "x-ms-date;host;x-ms-content-sha256"


@dataclass(frozen=True)
class SignatureParameters:
    """Inputs of the string to sign, computed fresh for each request.

    Attributes:
        verb: HTTP method in upper case.
        uri_path_and_query: Request path including the query string.
        timestamp: RFC 1123 date, also sent as ``x-ms-date``.
        host: Endpoint authority, also sent as ``host``.
        content_hash: Base64 SHA-256 of the body, also sent as ``x-ms-content-sha256``.
    """

    verb: str
    uri_path_and_query: str
    timestamp: str
    host: str
    content_hash: str


def build_string_to_sign(params: SignatureParameters) -> str:
    """Build the canonical string whose HMAC is the request signature."""
    return (
        f"{params.verb}\n"
        f"{params.uri_path_and_query}\n"
        f"{params.timestamp};{params.host};{params.content_hash}"
    )


def decode_access_key(access_key: str) -> bytes:
    """Decode a base64 access key into raw HMAC key bytes.

    Raises:
        ConfigurationError: If the key is empty or not valid base64.
    """
    if not access_key or not access_key.strip():
        raise ConfigurationError("Access key is required")
    try:
        return base64.b64decode(access_key.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(f"Access key is not valid base64: {e}") from e


def compute_signature(string_to_sign: str, access_key: str) -> str:
    """Return base64(HMAC-SHA256(decoded key, string_to_sign))."""
    key = decode_access_key(access_key)
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def build_authorization(signature: str) -> str:
    """Format the ``Authorization`` header value for a signature."""
    return f"HMAC-SHA256 SignedHeaders={SIGNED_HEADERS}&Signature={signature}"


def compute_content_hash(body: bytes) -> str:
    """Return base64(SHA-256(body)) for the exact bytes to be transmitted."""
    return base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")


def rfc1123_now() -> str:
    """Current UTC time formatted as e.g. ``Sat, 17 Oct 2026 09:30:00 GMT``."""
    return formatdate(usegmt=True)


def get_uri_authority(uri: str) -> str:
    """Return the authority of ``uri``: its host, plus ``:port`` when explicit.

    Raises:
        ConfigurationError: If the URI has no host or an invalid port.
    """
    parts = urlsplit(uri)
    host = parts.hostname
    if not host:
        raise ConfigurationError(f"Endpoint has no host: {uri!r}")
    if ":" in host:
        host = f"[{host}]"
    try:
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Endpoint has an invalid port: {uri!r}") from e
    if port:
        return f"{host}:{port}"
    return host


def sign_request(
    verb: str,
    path_and_query: str,
    endpoint: str,
    body: bytes,
    access_key: str,
    timestamp: str | None = None,
) -> dict[str, str]:
    """Compute the signed header set for one request.

    Args:
        verb: HTTP method.
        path_and_query: Path and query appended to the endpoint.
        endpoint: Base URI of the Communication Services resource.
        body: Exact bytes that will be sent (``b""`` for GET).
        access_key: Base64 shared access key.
        timestamp: Override for ``x-ms-date``; defaults to the current time.

    Returns:
        Headers to attach to the request, including ``Content-Type``.

    Raises:
        ConfigurationError: If the key or endpoint is invalid.
    """
    params = SignatureParameters(
        verb=verb.upper(),
        uri_path_and_query=path_and_query,
        timestamp=timestamp or rfc1123_now(),
        host=get_uri_authority(endpoint),
        content_hash=compute_content_hash(body),
    )
    signature = compute_signature(build_string_to_sign(params), access_key)
    return {
        "x-ms-date": params.timestamp,
        "x-ms-content-sha256": params.content_hash,
        "host": params.host,
        "Authorization": build_authorization(signature),
        "Content-Type": "application/json",
    }
