"""Tests for error classification."""

from __future__ import annotations

import pytest

from thrivecart.core.errors import (
    ErrorKind,
    RemoteError,
    ThriveCartError,
    TransportError,
    ValidationError,
    classify_failure,
)


class TestClassifyFailure:
    def test_error_and_reason(self):
        error = classify_failure(b'{"error":"invalid_request","reason":"missing field"}', status_code=400)
        assert isinstance(error, RemoteError)
        assert "invalid_request" in error.message
        assert "missing field" in error.message
        assert error.message == "[invalid_request] missing field"
        assert error.code == "invalid_request"
        assert error.reason == "missing field"
        assert error.status_code == 400
        assert error.kind is ErrorKind.REMOTE

    def test_error_without_reason(self):
        error = classify_failure('{"error":"unauthorized"}', status_code=401)
        assert isinstance(error, RemoteError)
        assert error.message == "[unauthorized]"

    def test_legacy_problem_payload(self):
        body = '{"status":422,"title":"Unprocessable","detail":"Bad input","errors":{"email":["required"]}}'
        error = classify_failure(body, status_code=422)
        assert isinstance(error, RemoteError)
        assert error.message == '422: Unprocessable - Bad input {"email": ["required"]}'
        assert error.code == "422"

    def test_legacy_payload_without_errors(self):
        error = classify_failure('{"status":404,"title":"Not Found","detail":"No such product"}')
        assert error.message == "404: Not Found - No such product"

    def test_non_json_body_is_transport_error(self):
        error = classify_failure(b"<html>Bad Gateway</html>", status_code=502)
        assert isinstance(error, TransportError)
        assert error.message == "<html>Bad Gateway</html>"
        assert error.body == "<html>Bad Gateway</html>"
        assert error.code == 502
        assert error.kind is ErrorKind.TRANSPORT

    def test_broken_json_is_transport_error(self):
        error = classify_failure("{not json", status_code=500)
        assert isinstance(error, TransportError)
        assert error.message == "{not json"

    def test_json_array_is_not_structured(self):
        assert isinstance(classify_failure('["a"]'), TransportError)

    def test_no_body_uses_message(self):
        error = classify_failure(None, message="Connection refused")
        assert isinstance(error, TransportError)
        assert error.message == "Connection refused"
        assert error.status_code is None


class TestTaxonomy:
    @pytest.mark.parametrize(
        "error, kind",
        [
            (ValidationError("bad", field="email", value="x"), ErrorKind.VALIDATION),
            (TransportError("down"), ErrorKind.TRANSPORT),
            (RemoteError("[e] r", error="e"), ErrorKind.REMOTE),
        ],
    )
    def test_kinds(self, error, kind):
        assert isinstance(error, ThriveCartError)
        assert error.kind is kind
        assert str(error) == error.message

    def test_validation_code_is_field(self):
        error = ValidationError("bad", field="perPage", value=99)
        assert error.code == "perPage"
        assert error.value == 99
