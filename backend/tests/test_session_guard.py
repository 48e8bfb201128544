import uuid
from datetime import timedelta

import pytest

from channelhub.shared.core.exceptions import AuthenticationError, AuthFailure
from channelhub.shared.models import User
from channelhub.shared.services.session_guard import SessionGuard
from channelhub.shared.services.token_service import TokenCodec

ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


@pytest.fixture
def user():
    return User(id=uuid.uuid4(), handle="alice", email="alice@channelhub.io")


@pytest.fixture
def guard(codec):
    return SessionGuard(codec)


def failure(guard, **tokens) -> AuthFailure:
    with pytest.raises(AuthenticationError) as exc:
        guard.authenticate(**tokens)
    return exc.value.reason


def test_header_token_yields_identity(guard, codec, user):
    principal = guard.authenticate(header_token=codec.create_access_token(user))

    assert principal.user_id == user.id
    assert principal.email == "alice@channelhub.io"
    assert principal.handle == "alice"


def test_cookie_takes_precedence_over_header(guard, codec, user):
    good = codec.create_access_token(user)

    assert guard.authenticate(cookie_token=good, header_token="garbage").user_id == user.id
    assert failure(guard, cookie_token="garbage", header_token=good) is AuthFailure.MALFORMED


def test_missing_token(guard):
    assert failure(guard) is AuthFailure.MISSING
    assert failure(guard, cookie_token="", header_token=None) is AuthFailure.MISSING


def test_expired_token(user):
    codec = TokenCodec(ACCESS_SECRET, REFRESH_SECRET, timedelta(seconds=-10), timedelta(days=1))
    token = codec.create_access_token(user)

    assert failure(SessionGuard(codec), header_token=token) is AuthFailure.EXPIRED


def test_token_signed_with_other_secret(guard, user):
    other = TokenCodec("some-other-access-secret-0123456789", REFRESH_SECRET, timedelta(minutes=5), timedelta(days=1))
    forged = other.create_access_token(user)

    assert failure(guard, header_token=forged) is AuthFailure.MALFORMED


def test_refresh_token_is_not_an_access_token(guard, codec, user):
    assert failure(guard, header_token=codec.create_refresh_token(user)) is AuthFailure.MALFORMED
