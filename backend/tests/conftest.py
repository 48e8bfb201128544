"""
Shared pytest fixtures.

Settings are read once at import time, so the environment is prepared
before anything from channelhub is imported.
"""

import os

os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret-0123456789abcdef"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret-0123456789abcdef"

import uuid
from datetime import timedelta
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from channelhub.api.main import create_application
from channelhub.shared.db import Database
from channelhub.shared.models import User, Video
from channelhub.shared.repositories import UserRepository
from channelhub.shared.services.credential_service import CredentialService
from channelhub.shared.services.token_service import TokenCodec


STRONG_PASSWORD = "Str0ng!Pass"


class FakeMediaStore:
    """In-memory MediaStore."""

    def __init__(self, delete_error: Optional[Exception] = None) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.delete_error = delete_error

    async def store(self, data: bytes, filename: str, content_type: Optional[str] = None) -> str:
        url = f"https://media.test/{uuid.uuid4().hex}/{filename}"
        self.objects[url] = data
        return url

    async def delete(self, url: str) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(url)
        self.objects.pop(url, None)


@pytest_asyncio.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def codec():
    return TokenCodec(
        access_secret="test-access-secret-0123456789abcdef",
        refresh_secret="test-refresh-secret-0123456789abcdef",
        access_ttl=timedelta(minutes=5),
        refresh_ttl=timedelta(days=1),
    )


@pytest.fixture
def make_user(session):
    """Factory creating users through the credential service."""

    async def _make(
        handle: str = "alice",
        email: Optional[str] = None,
        password: str = STRONG_PASSWORD,
    ) -> User:
        profile = await CredentialService(session).create(
            handle=handle,
            email=email or f"{handle}@channelhub.io",
            display_name=handle.title(),
            password=password,
            avatar_url=f"https://media.test/{handle}/avatar.png",
        )
        return await UserRepository(session).get(uuid.UUID(profile.id))

    return _make


@pytest.fixture
def make_video(session):
    async def _make(publisher: Optional[User], title: str = "A video") -> Video:
        video = Video(
            publisher_id=publisher.id if publisher else None,
            title=title,
            description=f"{title} description",
            video_url=f"https://media.test/videos/{uuid.uuid4().hex}.mp4",
            thumbnail_url=f"https://media.test/thumbs/{uuid.uuid4().hex}.png",
            duration=42.0,
        )
        session.add(video)
        await session.flush()
        await session.refresh(video)
        return video

    return _make


@pytest_asyncio.fixture
async def client(database, media_store):
    app = create_application(database=database, media_store=media_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
