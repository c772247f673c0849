import json

import pytest

from payrex.core.errors import (
    ApiError,
    AuthenticationError,
    DecodingError,
    NetworkError,
    NetworkErrorKind,
    NotFoundError,
    PayrexError,
    RateLimitError,
    ServerError,
    UnknownApiError,
    ValidationError,
    error_from_response,
)


@pytest.mark.parametrize(
    "status, expected",
    [
        (400, ValidationError),
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (422, ValidationError),
        (429, RateLimitError),
        (500, ServerError),
        (503, ServerError),
        (409, UnknownApiError),
        (302, UnknownApiError),
    ],
)
def test_status_classification(status, expected):
    error = error_from_response(status, "")

    assert type(error) is expected
    assert error.status_code == status
    assert f"HTTP {status}" in error.message


def test_only_transient_kinds_are_retryable():
    assert NetworkError(NetworkErrorKind.TIMEOUT, "timed out").retryable
    assert error_from_response(429, "").retryable
    assert error_from_response(502, "").retryable
    assert not error_from_response(400, "").retryable
    assert not error_from_response(401, "").retryable
    assert not error_from_response(404, "").retryable
    assert not DecodingError("bad body").retryable


def test_validation_error_exposes_field_details():
    body = json.dumps(
        {
            "errors": [
                {"code": "parameter_invalid", "detail": "amount must be at least 2000", "parameter": "amount"},
                {"code": "parameter_missing", "detail": "currency is required", "parameter": "currency"},
            ]
        }
    )

    error = error_from_response(400, body, request_id="req_9")

    assert isinstance(error, ValidationError)
    assert error.code == "parameter_invalid"
    assert error.request_id == "req_9"
    assert error.field_errors == {
        "amount": "amount must be at least 2000",
        "currency": "currency is required",
    }
    assert "amount must be at least 2000" in error.message


def test_nested_error_object_is_understood():
    body = json.dumps({"error": {"code": "resource_missing", "message": "No such customer"}})

    error = error_from_response(404, body)

    assert isinstance(error, NotFoundError)
    assert error.code == "resource_missing"
    assert error.message == "No such customer"


def test_unparsable_body_falls_back_to_status_message():
    error = error_from_response(500, "<html>oops</html>")

    assert isinstance(error, ServerError)
    assert error.message == "The PayRex API reported an internal error (HTTP 500)"
    assert error.errors == ()


def test_rate_limit_carries_retry_after():
    error = error_from_response(429, "{}", retry_after=2.0)

    assert isinstance(error, RateLimitError)
    assert error.retry_after == 2.0


def test_every_error_has_a_message():
    with pytest.raises(ValueError):
        PayrexError("")
    with pytest.raises(ValueError):
        ApiError("  ", status_code=400)


def test_str_includes_status_code_and_request_id():
    error = error_from_response(401, json.dumps({"code": "unauthorized", "message": "Bad key"}), request_id="req_1")

    assert str(error) == "Bad key (status=401, code=unauthorized, request_id=req_1)"


def test_decoding_error_truncates_body():
    error = DecodingError("could not decode", body="x" * 2000)

    assert len(error.body) == 512
    assert error.code == "decoding_error"


def test_network_error_kind_is_coerced():
    error = NetworkError("connection_failed", "refused")

    assert error.kind is NetworkErrorKind.CONNECTION_FAILED
    assert error.code == "connection_failed"
