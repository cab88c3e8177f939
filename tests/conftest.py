"""Shared fixtures for acs_mailer tests."""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest
import requests


@pytest.fixture
def access_key() -> str:
    """A valid base64 access key."""
    return base64.b64encode(b"test-secret-key").decode()


@pytest.fixture
def make_response():
    """Factory for real ``requests.Response`` objects."""

    def _make(
        status_code: int,
        payload: Any = None,
        content: bytes | None = None,
        reason: str | None = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        if content is None:
            content = json.dumps(payload).encode() if payload is not None else b""
        response._content = content
        response.reason = reason
        response.encoding = "utf-8"
        return response

    return _make
