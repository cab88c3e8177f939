"""Tests for response classification."""

import requests

from acs_mailer.results import (
    Accepted,
    RemoteError,
    StatusReport,
    TransportError,
    interpret_send_response,
    interpret_status_response,
    remote_error_from_response,
    transport_error_from_exception,
)


class TestSendResponse:
    """Tests for interpret_send_response."""

    def test_accepted(self, make_response):
        result = interpret_send_response(make_response(202, {"id": "op-123", "status": "Running"}))
        assert result == Accepted(operation_id="op-123", status_code=202)
        assert result.ok is True

    def test_only_202_is_success(self, make_response):
        result = interpret_send_response(make_response(200, {"id": "op-123"}))
        assert isinstance(result, RemoteError)
        assert result.ok is False

    def test_accepted_without_id(self, make_response):
        result = interpret_send_response(make_response(202, {}))
        assert isinstance(result, RemoteError)
        assert result.code == "InvalidResponse"

    def test_service_error(self, make_response):
        response = make_response(400, {"error": {"message": "bad address", "code": "InvalidRecipient"}})
        result = interpret_send_response(response)
        assert result == RemoteError(message="bad address", code="InvalidRecipient", status_code=400)


class TestRemoteError:
    """Tests for error body parsing."""

    def test_non_json_body(self, make_response):
        result = remote_error_from_response(make_response(502, content=b"<html>bad gateway</html>", reason="Bad Gateway"))
        assert result.code == "HTTP502"
        assert result.message == "Bad Gateway"

    def test_body_without_error_uses_text(self, make_response):
        result = remote_error_from_response(make_response(401, content=b"Denied"))
        assert result.code == "HTTP401"
        assert result.message == "Denied"

    def test_error_without_code(self, make_response):
        result = remote_error_from_response(make_response(403, {"error": {"message": "forbidden"}}))
        assert result.message == "forbidden"
        assert result.code == "HTTP403"


class TestStatusResponse:
    """Tests for interpret_status_response."""

    def test_any_2xx_returns_payload(self, make_response):
        for status in (200, 202):
            result = interpret_status_response(make_response(status, {"id": "op", "status": "Succeeded"}))
            assert isinstance(result, StatusReport)
            assert result.status_code == status
            assert result.status == "Succeeded"

    def test_error_status(self, make_response):
        response = make_response(404, {"error": {"message": "not found", "code": "NotFound"}})
        result = interpret_status_response(response)
        assert result == RemoteError(message="not found", code="NotFound", status_code=404)

    def test_non_dict_payload_has_no_status(self, make_response):
        result = interpret_status_response(make_response(200, ["x"]))
        assert result.payload == ["x"]
        assert result.status is None


class TestTransportError:
    """Tests for transport failure classification."""

    def test_class_name_when_no_errno(self):
        result = transport_error_from_exception(requests.ConnectionError("Connection refused"))
        assert result == TransportError(message="Connection refused", code="ConnectionError")
        assert result.ok is False

    def test_wrapped_errno(self):
        exc = requests.ConnectionError(ConnectionRefusedError(111, "Connection refused"))
        assert transport_error_from_exception(exc).code == 111

    def test_errno_from_cause(self):
        try:
            try:
                raise TimeoutError(110, "timed out")
            except TimeoutError as inner:
                raise requests.Timeout("read timed out") from inner
        except requests.Timeout as exc:
            result = transport_error_from_exception(exc)
        assert result.code == 110
        assert result.message == "read timed out"

    def test_timeout_class_name(self):
        assert transport_error_from_exception(requests.ConnectTimeout()).code == "ConnectTimeout"
