"""Error hierarchy tests - XRPC envelopes, codes and HTTP statuses."""

import pytest

from anchor_pds.core.domain_types import RejectionReason
from anchor_pds.core.errors import (
    AnchorError,
    AuthenticationRequiredError,
    CheckinValidationError,
    DatabaseError,
    ErrorCategory,
    ForbiddenError,
    InvalidRequestError,
    MethodNotImplementedError,
    NotFoundError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
)


@pytest.mark.parametrize("error,code,status", [
    (AuthenticationRequiredError(), "AuthenticationRequired", 401),
    (ForbiddenError("nope"), "Forbidden", 403),
    (InvalidRequestError("bad"), "InvalidRequest", 400),
    (RecordNotFoundError("at://x/y/z"), "RecordNotFound", 404),
    (NotFoundError(), "NotFound", 404),
    (MethodNotImplementedError("com.atproto.repo.deleteRecord"), "MethodNotImplemented", 501),
    (DatabaseError("boom", "commit"), "InternalServerError", 503),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, AnchorError)
    assert error.code == code
    assert error.http_status == status


def test_response_is_xrpc_envelope():
    assert ForbiddenError("Can only access your own check-ins").to_response() == {
        "error": "Forbidden",
        "message": "Can only access your own check-ins",
    }


def test_validation_error_carries_reason_and_field():
    error = CheckinValidationError(
        RejectionReason.MISSING_LATITUDE, "geo location must have latitude as string",
        "latitude",
    )
    assert isinstance(error, InvalidRequestError)
    assert error.reason == RejectionReason.MISSING_LATITUDE
    assert error.field == "latitude"
    assert error.to_response()["error"] == "InvalidRequest"


def test_duplicate_record_is_an_invalid_request():
    error = RecordAlreadyExistsError("rk1")
    assert error.code == "InvalidRequest"
    assert "rk1" in error.message


def test_duplicate_record_is_a_conflict_shaped_as_invalid_request():
    error = RecordAlreadyExistsError("rk1")
    assert error.category == ErrorCategory.CONFLICT
    assert error.code == "InvalidRequest"
    assert error.http_status == 400
    assert error.to_response() == {
        "error": "InvalidRequest", "message": "Record already exists: rk1",
    }


def test_invalid_request_defaults_to_validation_category():
    assert InvalidRequestError("bad").category == ErrorCategory.VALIDATION
