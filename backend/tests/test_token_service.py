from datetime import timedelta

import pytest
from sqlalchemy import delete

from channelhub.shared.core.exceptions import AuthenticationError, AuthFailure
from channelhub.shared.models import User
from channelhub.shared.services.token_service import TokenCodec, TokenService


async def rotate_failure(service, token) -> AuthFailure:
    with pytest.raises(AuthenticationError) as exc:
        await service.rotate(token)
    return exc.value.reason


class TestIssue:
    async def test_stores_refresh_token(self, session, make_user, codec):
        user = await make_user("alice")

        pair = await TokenService(session, codec).issue(user)

        assert user.refresh_token == pair.refresh_token
        assert pair.access_token != pair.refresh_token
        assert pair.expires_in == 300

    async def test_access_token_claims(self, session, make_user, codec):
        user = await make_user("alice")

        pair = await TokenService(session, codec).issue(user)
        claims = codec.decode_access_token(pair.access_token)

        assert claims["user_id"] == str(user.id)
        assert claims["email"] == "alice@channelhub.io"
        assert claims["handle"] == "alice"
        assert claims["type"] == "access"

    async def test_new_issue_invalidates_previous_session(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)

        first = await service.issue(user)
        await service.issue(user)

        assert await rotate_failure(service, first.refresh_token) is AuthFailure.TOKEN_MISMATCH


class TestRotate:
    async def test_rotation_is_use_once(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)
        t1 = await service.issue(user)

        t2 = await service.rotate(t1.refresh_token)

        assert t2.refresh_token != t1.refresh_token
        assert t2.access_token != t1.access_token
        assert await rotate_failure(service, t1.refresh_token) is AuthFailure.TOKEN_MISMATCH
        # the new token keeps working
        t3 = await service.rotate(t2.refresh_token)
        assert t3.refresh_token != t2.refresh_token

    async def test_revoked_session_cannot_rotate(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)
        pair = await service.issue(user)

        await service.revoke(user.id)

        assert user.refresh_token is None
        assert await rotate_failure(service, pair.refresh_token) is AuthFailure.TOKEN_MISMATCH

    async def test_lost_compare_and_swap_is_rejected(self, session, make_user, codec, monkeypatch):
        user = await make_user("alice")
        service = TokenService(session, codec)
        pair = await service.issue(user)

        original_swap = service.repo.swap_refresh_token

        async def racing_swap(user_id, expected, new):
            # another rotation commits between the comparison and the swap
            await service.repo.set_refresh_token(user_id, "written-by-concurrent-rotation")
            return await original_swap(user_id, expected=expected, new=new)

        monkeypatch.setattr(service.repo, "swap_refresh_token", racing_swap)

        assert await rotate_failure(service, pair.refresh_token) is AuthFailure.ROTATION_RACE

    async def test_missing_token(self, session, codec):
        assert await rotate_failure(TokenService(session, codec), None) is AuthFailure.MISSING

    async def test_garbage_token(self, session, codec):
        assert await rotate_failure(TokenService(session, codec), "not.a.jwt") is AuthFailure.MALFORMED

    async def test_access_token_cannot_be_used_to_refresh(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)
        pair = await service.issue(user)

        assert await rotate_failure(service, pair.access_token) is AuthFailure.MALFORMED

    async def test_expired_token(self, session, make_user):
        user = await make_user("alice")
        expired_codec = TokenCodec(
            access_secret="test-access-secret-0123456789abcdef",
            refresh_secret="test-refresh-secret-0123456789abcdef",
            access_ttl=timedelta(minutes=5),
            refresh_ttl=timedelta(seconds=-10),
        )
        service = TokenService(session, expired_codec)
        pair = await service.issue(user)

        assert await rotate_failure(service, pair.refresh_token) is AuthFailure.EXPIRED

    async def test_token_for_deleted_user(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)
        pair = await service.issue(user)

        await session.execute(delete(User).where(User.id == user.id))

        assert await rotate_failure(service, pair.refresh_token) is AuthFailure.USER_NOT_FOUND

    async def test_failures_share_one_public_message(self, session, make_user, codec):
        user = await make_user("alice")
        service = TokenService(session, codec)
        pair = await service.issue(user)
        await service.rotate(pair.refresh_token)

        messages = set()
        for token in ("not.a.jwt", pair.refresh_token, pair.access_token):
            with pytest.raises(AuthenticationError) as exc:
                await service.rotate(token)
            messages.add(exc.value.message)
            assert "reason" not in str(exc.value.to_dict())

        assert len(messages) == 1
