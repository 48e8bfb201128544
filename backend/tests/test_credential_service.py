import pytest

from channelhub.shared.adapters.media_store import MediaUpload
from channelhub.shared.core.exceptions import (
    AuthenticationError,
    AuthFailure,
    ConflictError,
    ExternalServiceError,
    UserNotFoundError,
    ValidationError,
)
from channelhub.shared.services.credential_service import CredentialService

from conftest import STRONG_PASSWORD, FakeMediaStore


async def create(service, handle="Alice", email="Alice@ChannelHub.io", password=STRONG_PASSWORD):
    return await service.create(
        handle=handle,
        email=email,
        display_name="Alice",
        password=password,
        avatar_url="https://media.test/alice/avatar.png",
    )


class TestCreate:
    async def test_normalises_handle_and_email(self, session):
        profile = await create(CredentialService(session))

        assert profile.handle == "alice"
        assert profile.email == "alice@channelhub.io"
        assert profile.cover_image_url is None

    async def test_profile_never_carries_secrets(self, session):
        profile = await create(CredentialService(session))

        dumped = profile.model_dump()
        assert "password" not in dumped
        assert "password_hash" not in dumped
        assert "refresh_token" not in dumped

    async def test_password_is_hashed(self, session, make_user):
        user = await make_user("alice")
        assert user.password_hash != STRONG_PASSWORD
        assert user.password_hash.startswith("$2")

    async def test_duplicate_email_with_other_casing_conflicts(self, session):
        service = CredentialService(session)
        await create(service)

        with pytest.raises(ConflictError):
            await create(service, handle="alicia", email="ALICE@channelhub.IO")

    async def test_duplicate_handle_conflicts(self, session):
        service = CredentialService(session)
        await create(service)

        with pytest.raises(ConflictError):
            await create(service, handle="ALICE", email="other@channelhub.io")

    async def test_weak_password_is_rejected(self, session):
        with pytest.raises(ValidationError):
            await create(CredentialService(session), password="password")

    async def test_avatar_is_required(self, session):
        with pytest.raises(ValidationError) as exc:
            await CredentialService(session).create(
                handle="alice",
                email="alice@channelhub.io",
                display_name="Alice",
                password=STRONG_PASSWORD,
                avatar_url="",
            )
        assert exc.value.details == {"field": "avatar"}


class TestVerify:
    async def test_accepts_handle_or_email(self, session, make_user):
        user = await make_user("alice")
        service = CredentialService(session)

        assert (await service.verify("alice", STRONG_PASSWORD)).id == user.id
        assert (await service.verify("ALICE@channelhub.io", STRONG_PASSWORD)).id == user.id

    @pytest.mark.parametrize("password", ["", "Str0ng!Pas", "str0ng!pass", STRONG_PASSWORD + " "])
    async def test_rejects_any_other_password(self, session, make_user, password):
        await make_user("alice")

        with pytest.raises(AuthenticationError) as exc:
            await CredentialService(session).verify("alice", password)
        assert exc.value.reason is AuthFailure.BAD_PASSWORD

    async def test_longest_password_does_not_match_longer_input(self, session, make_user):
        longest = "Aa1!" + "x" * 68
        await make_user("alice", password=longest)
        service = CredentialService(session)

        assert (await service.verify("alice", longest)).handle == "alice"
        with pytest.raises(AuthenticationError):
            await service.verify("alice", longest + "something else")

    async def test_unknown_identifier_is_not_found(self, session):
        with pytest.raises(UserNotFoundError):
            await CredentialService(session).verify("nobody", STRONG_PASSWORD)

    async def test_blank_identifier_is_invalid(self, session):
        with pytest.raises(ValidationError):
            await CredentialService(session).verify("  ", STRONG_PASSWORD)


class TestUpdates:
    async def test_update_profile(self, session, make_user):
        user = await make_user("alice")

        profile = await CredentialService(session).update_profile(user.id, "Alice Cooper", "Cooper@ChannelHub.io")

        assert profile.display_name == "Alice Cooper"
        assert profile.email == "cooper@channelhub.io"

    async def test_update_profile_keeps_own_email(self, session, make_user):
        user = await make_user("alice")

        profile = await CredentialService(session).update_profile(user.id, "Alicia", "alice@channelhub.io")
        assert profile.email == "alice@channelhub.io"

    async def test_update_profile_rejects_taken_email(self, session, make_user):
        user = await make_user("alice")
        await make_user("bob")

        with pytest.raises(ConflictError):
            await CredentialService(session).update_profile(user.id, "Alice", "bob@channelhub.io")

    async def test_update_password_requires_old_password(self, session, make_user):
        user = await make_user("alice")

        with pytest.raises(ValidationError) as exc:
            await CredentialService(session).update_password(user.id, "Wr0ng!Pass", "N3w!Password")
        assert exc.value.message == "Invalid old password"

    async def test_update_password_rehashes(self, session, make_user):
        user = await make_user("alice")
        service = CredentialService(session)

        await service.update_password(user.id, STRONG_PASSWORD, "N3w!Password")

        assert (await service.verify("alice", "N3w!Password")).id == user.id
        with pytest.raises(AuthenticationError):
            await service.verify("alice", STRONG_PASSWORD)

    async def test_update_password_enforces_policy(self, session, make_user):
        user = await make_user("alice")

        with pytest.raises(ValidationError) as exc:
            await CredentialService(session).update_password(user.id, STRONG_PASSWORD, "weakweak")
        assert exc.value.details == {"field": "new_password"}


class TestImages:
    async def test_avatar_replacement_deletes_previous_image(self, session, make_user, media_store):
        user = await make_user("alice")
        old_url = user.avatar_url

        profile = await CredentialService(session, media_store).update_avatar(
            user.id, MediaUpload(b"png-bytes", "me.png", "image/png")
        )

        assert profile.avatar_url in media_store.objects
        assert profile.avatar_url != old_url
        assert media_store.deleted == [old_url]

    @pytest.mark.parametrize(
        "error",
        [
            ExternalServiceError("media-store", "Media deletion failed"),
            ConnectionError("media host unreachable"),
        ],
    )
    async def test_failed_cleanup_does_not_block_update(self, session, make_user, error):
        user = await make_user("alice")
        old_url = user.avatar_url
        store = FakeMediaStore(delete_error=error)

        profile = await CredentialService(session, store).update_avatar(
            user.id, MediaUpload(b"png-bytes", "me.png", "image/png")
        )

        assert profile.avatar_url in store.objects
        assert profile.avatar_url != old_url

    async def test_first_cover_image_has_nothing_to_delete(self, session, make_user, media_store):
        user = await make_user("alice")

        await CredentialService(session, media_store).update_cover_image(
            user.id, MediaUpload(b"jpg-bytes", "cover.jpg")
        )

        assert media_store.deleted == []

    async def test_missing_file_is_rejected(self, session, make_user, media_store):
        user = await make_user("alice")

        with pytest.raises(ValidationError):
            await CredentialService(session, media_store).update_avatar(user.id, None)
