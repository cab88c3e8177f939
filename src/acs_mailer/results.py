# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Outcome of send and status requests.

A send attempt ends in exactly one of:

- ``Accepted``: the service returned 202 and an operation id
- ``RemoteError``: the service answered with an error status
- ``TransportError``: no HTTP status was obtained (DNS, TLS, refused, timeout)

A status query ends in ``StatusReport`` or one of the two error variants.
Every variant has an ``ok`` attribute so callers can branch without
``isinstance`` checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

import requests

SEND_ACCEPTED_STATUS = 202


@dataclass(frozen=True)
class Accepted:
    """The service accepted the message for delivery.

    Attributes:
        operation_id: Identifier to poll with ``get_send_status``.
        status_code: HTTP status returned by the service.
    """

    operation_id: str
    status_code: int = SEND_ACCEPTED_STATUS
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class StatusReport:
    """Decoded body of a successful status query.

    Attributes:
        payload: JSON body, typically ``{"id": ..., "status": ...}``.
        status_code: HTTP status returned by the service.
    """

    payload: Any
    status_code: int
    ok: bool = field(default=True, init=False)

    @property
    def status(self) -> str | None:
        """Delivery status reported by the service, if present."""
        if isinstance(self.payload, dict):
            return self.payload.get("status")
        return None


@dataclass(frozen=True)
class RemoteError:
    """The service rejected the request or reported a failure.

    Attributes:
        message: Service-provided error message.
        code: Service-provided error code, e.g. ``InvalidRecipient``.
        status_code: HTTP status of the response.
    """

    message: str
    code: str
    status_code: int | None = None
    ok: bool = field(default=False, init=False)


@dataclass(frozen=True)
class TransportError:
    """The HTTP call itself failed before a status was obtained.

    Attributes:
        message: Error text from the transport.
        code: OS errno when available, otherwise the exception class name.
    """

    message: str
    code: int | str
    ok: bool = field(default=False, init=False)


SendResult = Union[Accepted, RemoteError, TransportError]
StatusResult = Union[StatusReport, RemoteError, TransportError]
ErrorResult = Union[RemoteError, TransportError]


def _native_error_code(exc: BaseException) -> int | str:
    """Find the errno of the innermost OS error wrapped by ``exc``."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        errno = getattr(current, "errno", None)
        if isinstance(errno, int):
            return errno
        linked = [getattr(current, "reason", None), current.__cause__, current.__context__]
        linked.extend(current.args)
        stack.extend(e for e in linked if isinstance(e, BaseException))
    return type(exc).__name__


def transport_error_from_exception(exc: requests.RequestException) -> TransportError:
    """Classify a transport failure. The response body is never parsed."""
    return TransportError(message=str(exc) or type(exc).__name__, code=_native_error_code(exc))


def _decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def remote_error_from_response(response: requests.Response) -> RemoteError:
    """Extract ``error: {message, code}`` from an error response.

    Bodies that are not JSON or carry no ``error`` object fall back to the
    HTTP reason and an ``HTTP<status>`` code.
    """
    data = _decode_json(response)
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return RemoteError(
            message=str(error.get("message", "")),
            code=str(error.get("code", f"HTTP{response.status_code}")),
            status_code=response.status_code,
        )
    message = response.reason or (response.text or "").strip() or "Unexpected response"
    return RemoteError(message=message, code=f"HTTP{response.status_code}", status_code=response.status_code)


def interpret_send_response(response: requests.Response) -> SendResult:
    """Map an ``emails:send`` response to a ``SendResult``.

    Only HTTP 202 counts as success.
    """
    if response.status_code != SEND_ACCEPTED_STATUS:
        return remote_error_from_response(response)

    data = _decode_json(response)
    operation_id = data.get("id") if isinstance(data, dict) else None
    if not operation_id:
        return RemoteError(
            message="Accepted response has no operation id",
            code="InvalidResponse",
            status_code=response.status_code,
        )
    return Accepted(operation_id=str(operation_id), status_code=response.status_code)


def interpret_status_response(response: requests.Response) -> StatusResult:
    """Map an operation status response to a ``StatusResult``.

    Any 2xx status returns the decoded body.
    """
    if not 200 <= response.status_code < 300:
        return remote_error_from_response(response)
    return StatusReport(payload=_decode_json(response), status_code=response.status_code)
