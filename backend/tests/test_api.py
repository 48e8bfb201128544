import structlog

from conftest import STRONG_PASSWORD


USERS = "/api/v1/users"
PNG = ("avatar.png", b"\x89PNG fake image bytes", "image/png")


async def register(client, handle="alice", email=None, password=STRONG_PASSWORD, files=None):
    return await client.post(
        f"{USERS}/register",
        data={
            "handle": handle,
            "email": email or f"{handle}@channelhub.io",
            "display_name": handle.title(),
            "password": password,
            "confirm_password": password,
        },
        files=files if files is not None else {"avatar": PNG},
    )


async def login(client, handle="alice", password=STRONG_PASSWORD):
    return await client.post(f"{USERS}/login", json={"handle": handle, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestAliceScenario:
    async def test_register_login_and_rotate_once(self, client, media_store):
        response = await register(client, handle="Alice", email="Alice@ChannelHub.io")
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["handle"] == "alice"
        assert body["data"]["email"] == "alice@channelhub.io"
        assert body["data"]["avatar_url"] in media_store.objects
        assert "password_hash" not in body["data"]

        response = await login(client)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["access_token"] and data["refresh_token"]
        assert set(data["user"]) >= {"id", "handle", "email", "display_name", "avatar_url"}
        assert "password_hash" not in data["user"]
        assert "refresh_token" not in data["user"]

        wrong = await login(client, password="Wr0ng!Pass")
        assert wrong.status_code == 401
        assert wrong.json()["success"] is False

        client.cookies.clear()
        first = await client.post(f"{USERS}/refresh-token", json={"refresh_token": data["refresh_token"]})
        assert first.status_code == 200
        assert first.json()["data"]["refresh_token"] != data["refresh_token"]

        client.cookies.clear()
        reused = await client.post(f"{USERS}/refresh-token", json={"refresh_token": data["refresh_token"]})
        assert reused.status_code == 401
        assert reused.json()["error"]["code"] == "AUTHENTICATION_ERROR"
        assert "token_mismatch" not in reused.text


class TestAuthEndpoints:
    async def test_login_sets_session_cookies(self, client):
        await register(client)

        response = await login(client)

        cookies = response.headers.get_list("set-cookie")
        access = next(c for c in cookies if c.startswith("accessToken="))
        refresh = next(c for c in cookies if c.startswith("refreshToken="))
        for cookie in (access, refresh):
            assert "httponly" in cookie.lower()
            assert "secure" in cookie.lower()
            assert "samesite=strict" in cookie.lower()
        assert "max-age=21600" in access.lower()
        assert "max-age=864000" in refresh.lower()

    async def test_login_by_email(self, client):
        await register(client)

        response = await client.post(
            f"{USERS}/login", json={"email": "ALICE@channelhub.io", "password": STRONG_PASSWORD}
        )
        assert response.status_code == 200

    async def test_login_requires_identifier(self, client):
        response = await client.post(f"{USERS}/login", json={"password": STRONG_PASSWORD})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_login_unknown_user(self, client):
        response = await login(client, handle="nobody")
        assert response.status_code == 404

    async def test_register_duplicate_email_conflicts(self, client, media_store):
        await register(client)
        stored_before = len(media_store.objects)

        response = await register(client, handle="alicia", email="ALICE@channelhub.io")

        assert response.status_code == 409
        # rejected before anything was uploaded
        assert len(media_store.objects) == stored_before

    async def test_register_password_mismatch(self, client):
        response = await client.post(
            f"{USERS}/register",
            data={
                "handle": "alice",
                "email": "alice@channelhub.io",
                "display_name": "Alice",
                "password": STRONG_PASSWORD,
                "confirm_password": STRONG_PASSWORD + "x",
            },
            files={"avatar": PNG},
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"field": "confirm_password"}

    async def test_register_requires_avatar(self, client):
        response = await register(client, files={"cover_image": PNG})

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"field": "avatar"}

    async def test_register_weak_password(self, client):
        response = await register(client, password="password")
        assert response.status_code == 400

    async def test_logout_revokes_refresh_token(self, client):
        await register(client)
        tokens = (await login(client)).json()["data"]

        response = await client.post(f"{USERS}/logout", headers=bearer(tokens["access_token"]))
        assert response.status_code == 200
        cleared = response.headers.get_list("set-cookie")
        assert any(c.startswith('accessToken=""') or c.startswith("accessToken=;") for c in cleared)

        client.cookies.clear()
        refreshed = await client.post(f"{USERS}/refresh-token", json={"refresh_token": tokens["refresh_token"]})
        assert refreshed.status_code == 401

    async def test_refresh_without_token(self, client):
        response = await client.post(f"{USERS}/refresh-token")
        assert response.status_code == 401

    async def test_protected_route_requires_token(self, client):
        response = await client.get(f"{USERS}/me")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Unauthorized request",
            "error": {"code": "AUTHENTICATION_ERROR", "message": "Unauthorized request", "details": {}},
        }


class TestAccountEndpoints:
    async def signed_in(self, client, handle="alice"):
        await register(client, handle=handle)
        tokens = (await login(client, handle=handle)).json()["data"]
        client.cookies.clear()
        return bearer(tokens["access_token"])

    async def test_get_and_update_profile(self, client):
        headers = await self.signed_in(client)

        me = await client.get(f"{USERS}/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["data"]["handle"] == "alice"

        updated = await client.patch(
            f"{USERS}/me",
            headers=headers,
            json={"display_name": "Alice Cooper", "email": "cooper@channelhub.io"},
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["display_name"] == "Alice Cooper"
        assert updated.json()["data"]["email"] == "cooper@channelhub.io"

    async def test_change_password(self, client):
        headers = await self.signed_in(client)

        wrong = await client.post(
            f"{USERS}/change-password",
            headers=headers,
            json={"old_password": "Wr0ng!Pass", "new_password": "N3w!Password"},
        )
        assert wrong.status_code == 400

        ok = await client.post(
            f"{USERS}/change-password",
            headers=headers,
            json={"old_password": STRONG_PASSWORD, "new_password": "N3w!Password"},
        )
        assert ok.status_code == 200
        assert (await login(client, password="N3w!Password")).status_code == 200

    async def test_update_avatar_deletes_previous(self, client, media_store):
        headers = await self.signed_in(client)
        old_url = (await client.get(f"{USERS}/me", headers=headers)).json()["data"]["avatar_url"]

        response = await client.patch(
            f"{USERS}/me/avatar",
            headers=headers,
            files={"avatar": ("new.png", b"new image", "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["data"]["avatar_url"] != old_url
        assert media_store.deleted == [old_url]

    async def test_update_cover_image(self, client):
        headers = await self.signed_in(client)

        response = await client.patch(
            f"{USERS}/me/cover-image",
            headers=headers,
            files={"cover_image": ("cover.jpg", b"cover", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json()["data"]["cover_image_url"].endswith("/cover.jpg")

    async def test_empty_watch_history(self, client):
        headers = await self.signed_in(client)

        response = await client.get(f"{USERS}/me/watch-history", headers=headers)

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestChannelEndpoints:
    async def test_profile_and_subscription_flow(self, client):
        await register(client, handle="alice")
        await register(client, handle="bob")
        bob_tokens = (await login(client, handle="bob")).json()["data"]
        client.cookies.clear()
        headers = bearer(bob_tokens["access_token"])

        anonymous = await client.get(f"{USERS}/channels/alice")
        assert anonymous.status_code == 200
        assert anonymous.json()["data"]["is_subscribed"] is False
        assert "password_hash" not in anonymous.json()["data"]

        subscribed = await client.post(f"{USERS}/channels/alice/subscription", headers=headers)
        assert subscribed.status_code == 200
        assert subscribed.json()["data"]["changed"] is True

        again = await client.post(f"{USERS}/channels/alice/subscription", headers=headers)
        assert again.json()["data"]["changed"] is False

        seen_by_bob = (await client.get(f"{USERS}/channels/alice", headers=headers)).json()["data"]
        assert seen_by_bob["subscribers_count"] == 1
        assert seen_by_bob["is_subscribed"] is True

        removed = await client.delete(f"{USERS}/channels/alice/subscription", headers=headers)
        assert removed.json()["data"]["is_subscribed"] is False

    async def test_unknown_channel(self, client):
        response = await client.get(f"{USERS}/channels/nobody")
        assert response.status_code == 404

    async def test_invalid_token_on_public_route_is_rejected(self, client):
        await register(client)

        response = await client.get(f"{USERS}/channels/alice", headers=bearer("garbage"))
        assert response.status_code == 401


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert (await client.get("/ready")).json() == {"status": "ready"}


async def test_request_id_is_echoed_and_log_context_cleared(client):
    generated = await client.get("/health")
    echoed = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert len(generated.headers["X-Request-ID"]) == 32
    assert echoed.headers["X-Request-ID"] == "req-123"
    assert structlog.contextvars.get_contextvars() == {}
