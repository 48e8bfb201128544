import uuid

import pytest

from channelhub.shared.core.exceptions import NotFoundError, ValidationError
from channelhub.shared.repositories import SubscriptionRepository, WatchHistoryRepository
from channelhub.shared.services.channel_service import ChannelService
from channelhub.shared.services.subscription_service import SubscriptionService


VIEWERS = ["bob", "carol", "dave", "erin"]


class TestChannelProfile:
    async def test_channel_without_edges(self, session, make_user):
        alice = await make_user("alice")

        profile = await ChannelService(session).channel_profile("alice", viewer_id=alice.id)

        assert profile.subscribers_count == 0
        assert profile.subscribed_to_count == 0
        assert profile.is_subscribed is False
        assert profile.handle == "alice"
        assert profile.email == "alice@channelhub.io"

    async def test_single_subscriber(self, session, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        await SubscriptionRepository(session).add(bob.id, alice.id)

        service = ChannelService(session)
        seen_by_bob = await service.channel_profile("alice", viewer_id=bob.id)
        seen_by_alice = await service.channel_profile("alice", viewer_id=alice.id)

        assert seen_by_bob.subscribers_count == 1
        assert seen_by_bob.is_subscribed is True
        assert seen_by_alice.is_subscribed is False

    async def test_many_subscribers(self, session, make_user):
        alice = await make_user("alice")
        repo = SubscriptionRepository(session)
        viewers = []
        for handle in VIEWERS:
            viewer = await make_user(handle)
            await repo.add(viewer.id, alice.id)
            viewers.append(viewer)

        service = ChannelService(session)
        profile = await service.channel_profile("ALICE", viewer_id=viewers[-1].id)
        bob_profile = await service.channel_profile("bob", viewer_id=alice.id)

        assert profile.subscribers_count == len(VIEWERS)
        assert profile.is_subscribed is True
        assert bob_profile.subscribers_count == 0
        assert bob_profile.subscribed_to_count == 1
        assert bob_profile.is_subscribed is False

    async def test_subscribed_to_count(self, session, make_user):
        alice = await make_user("alice")
        repo = SubscriptionRepository(session)
        for handle in VIEWERS[:3]:
            channel = await make_user(handle)
            await repo.add(alice.id, channel.id)

        profile = await ChannelService(session).channel_profile("alice")

        assert profile.subscribed_to_count == 3
        assert profile.subscribers_count == 0

    async def test_anonymous_viewer_is_never_subscribed(self, session, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        await SubscriptionRepository(session).add(bob.id, alice.id)

        profile = await ChannelService(session).channel_profile("alice")

        assert profile.subscribers_count == 1
        assert profile.is_subscribed is False

    async def test_profile_has_only_public_fields(self, session, make_user):
        await make_user("alice")

        profile = await ChannelService(session).channel_profile("alice")

        assert set(profile.model_dump()) == {
            "display_name",
            "handle",
            "subscribers_count",
            "subscribed_to_count",
            "is_subscribed",
            "avatar_url",
            "cover_image_url",
            "email",
            "created_at",
        }

    @pytest.mark.parametrize("handle", ["", "   ", None])
    async def test_blank_handle(self, session, handle):
        with pytest.raises(ValidationError):
            await ChannelService(session).channel_profile(handle)

    async def test_unknown_handle(self, session):
        with pytest.raises(NotFoundError):
            await ChannelService(session).channel_profile("nobody")


class TestWatchHistory:
    async def test_empty_history(self, session, make_user):
        alice = await make_user("alice")

        assert await ChannelService(session).watch_history(alice.id) == []

    async def test_unknown_user_has_empty_history(self, session):
        assert await ChannelService(session).watch_history(uuid.uuid4()) == []

    async def test_two_videos_with_publishers(self, session, make_user, make_video):
        alice = await make_user("alice")
        bob = await make_user("bob")
        carol = await make_user("carol")
        first = await make_video(bob, "First")
        second = await make_video(carol, "Second")
        history = WatchHistoryRepository(session)
        await history.append(alice.id, first.id)
        await history.append(alice.id, second.id)

        items = await ChannelService(session).watch_history(alice.id)

        assert [item.title for item in items] == ["First", "Second"]
        assert [item.publisher.handle for item in items] == ["bob", "carol"]
        assert items[0].publisher.display_name == "Bob"
        assert items[0].publisher.avatar_url == bob.avatar_url

    async def test_history_keeps_order_and_repeats(self, session, make_user, make_video):
        alice = await make_user("alice")
        bob = await make_user("bob")
        one = await make_video(bob, "One")
        two = await make_video(bob, "Two")
        history = WatchHistoryRepository(session)
        for video in (two, one, two):
            await history.append(alice.id, video.id)

        items = await ChannelService(session).watch_history(alice.id)

        assert [item.title for item in items] == ["Two", "One", "Two"]

    async def test_video_without_publisher(self, session, make_user, make_video):
        alice = await make_user("alice")
        orphan = await make_video(None, "Orphan")
        await WatchHistoryRepository(session).append(alice.id, orphan.id)

        items = await ChannelService(session).watch_history(alice.id)

        assert len(items) == 1
        assert items[0].publisher is None


class TestSubscriptions:
    async def test_subscribe_is_idempotent(self, session, make_user):
        await make_user("alice")
        bob = await make_user("bob")
        service = SubscriptionService(session)

        first = await service.subscribe(bob.id, "Alice")
        second = await service.subscribe(bob.id, "alice")

        assert first.changed is True
        assert second.changed is False
        assert second.is_subscribed is True
        profile = await ChannelService(session).channel_profile("alice", viewer_id=bob.id)
        assert profile.subscribers_count == 1
        assert profile.is_subscribed is True

    async def test_cannot_subscribe_to_self(self, session, make_user):
        alice = await make_user("alice")

        with pytest.raises(ValidationError):
            await SubscriptionService(session).subscribe(alice.id, "alice")

    async def test_unknown_channel(self, session, make_user):
        bob = await make_user("bob")

        with pytest.raises(NotFoundError):
            await SubscriptionService(session).subscribe(bob.id, "nobody")

    async def test_unsubscribe(self, session, make_user):
        await make_user("alice")
        bob = await make_user("bob")
        service = SubscriptionService(session)
        await service.subscribe(bob.id, "alice")

        removed = await service.unsubscribe(bob.id, "alice")
        again = await service.unsubscribe(bob.id, "alice")

        assert removed.changed is True
        assert again.changed is False
        profile = await ChannelService(session).channel_profile("alice", viewer_id=bob.id)
        assert profile.subscribers_count == 0
        assert profile.is_subscribed is False
