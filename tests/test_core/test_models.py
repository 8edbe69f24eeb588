"""test_models.py
Test AdapterError / AdapterResponse serialization and status mapping.
"""
import pytest

from career_gateway.models import ERROR_STATUS_CODES, AdapterError, AdapterResponse, ErrorKind


@pytest.mark.parametrize(
    "kind, status_code",
    [
        (ErrorKind.VALIDATION, 400),
        (ErrorKind.CONFIGURATION, 500),
        (ErrorKind.RATE_LIMITED, 429),
        (ErrorKind.PAYMENT_REQUIRED, 402),
        (ErrorKind.UPSTREAM_FAILURE, 500),
        (ErrorKind.UNPARSABLE_RESULT, 500),
        (ErrorKind.MALFORMED_RESULT, 500),
    ],
)
def test_status_codes(kind, status_code):
    assert AdapterError(kind=kind, message="x").status_code == status_code


def test_every_kind_has_a_status():
    assert set(ERROR_STATUS_CODES) == set(ErrorKind)


def test_validation_body_has_details():
    error = AdapterError(ErrorKind.VALIDATION, "Invalid input", details="resume: Resume is required")
    assert error.to_body() == {"error": "Invalid input", "details": "resume: Resume is required"}


def test_rate_limited_body_always_has_retry_after():
    assert AdapterError(ErrorKind.RATE_LIMITED, "slow").to_body() == {"error": "slow", "retryAfter": None}
    assert AdapterError(ErrorKind.RATE_LIMITED, "slow", retry_after=45).to_body()["retryAfter"] == 45


def test_other_kinds_only_carry_error():
    error = AdapterError(ErrorKind.UPSTREAM_FAILURE, "AI service error", details="ignored", retry_after=3)
    assert error.to_body() == {"error": "AI service error"}


def test_response_from_error():
    response = AdapterResponse.from_error(AdapterError(ErrorKind.PAYMENT_REQUIRED, "no credits"))
    assert response.status_code == 402
    assert response.body == {"error": "no credits"}
    assert not response.ok
    assert AdapterResponse(status_code=200, body={"analysis": {}}).ok
