import pytest

from channelhub.shared.core.exceptions import (
    AuthenticationError,
    AuthFailure,
    AuthorizationError,
    ChannelNotFoundError,
    DuplicateResourceError,
    ErrorKind,
    ExternalServiceError,
    InternalError,
    ServiceUnavailableError,
    UserNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error, kind, status",
    [
        (ValidationError("Handle is required"), ErrorKind.VALIDATION, 400),
        (AuthenticationError(), ErrorKind.UNAUTHORIZED, 401),
        (AuthorizationError(), ErrorKind.FORBIDDEN, 403),
        (UserNotFoundError(), ErrorKind.NOT_FOUND, 404),
        (ChannelNotFoundError("nobody"), ErrorKind.NOT_FOUND, 404),
        (DuplicateResourceError(), ErrorKind.CONFLICT, 409),
        (ServiceUnavailableError(), ErrorKind.UNAVAILABLE, 503),
        (ExternalServiceError("media-store"), ErrorKind.UNAVAILABLE, 503),
        (InternalError(), ErrorKind.INTERNAL, 500),
    ],
)
def test_each_kind_maps_to_one_status(error, kind, status):
    assert error.kind is kind
    assert error.status_code == status
    assert error.to_dict()["success"] is False


def test_failure_reason_is_not_serialized():
    error = AuthenticationError("Refresh token is invalid", reason=AuthFailure.TOKEN_MISMATCH)

    body = error.to_dict()

    assert error.reason is AuthFailure.TOKEN_MISMATCH
    assert "token_mismatch" not in str(body)
    assert body["error"]["code"] == "AUTHENTICATION_ERROR"
