"""
Media store adapter - avatar and cover image storage.

Provides:
- MediaStore protocol: the two operations the core relies on
- S3MediaStore: AWS S3 implementation

Contract:
=========
    store(data, filename, content_type) -> url   (raises ExternalServiceError)
    delete(url) -> None                          (best effort; callers log failures)

boto3 is blocking, so every call runs in a worker thread via
asyncio.to_thread and never stalls the event loop.
"""

import asyncio
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional, Protocol
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from channelhub.config.settings import Settings
from channelhub.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaUpload:
    """An uploaded file read into memory."""

    data: bytes
    filename: str
    content_type: Optional[str] = None


class MediaStore(Protocol):
    """Storage for user-uploaded images."""

    async def store(self, data: bytes, filename: str, content_type: Optional[str] = None) -> str:
        ...

    async def delete(self, url: str) -> None:
        ...


class S3MediaStore:
    """
    MediaStore backed by an S3 bucket.

    Objects are written under ``<prefix>/<uuid><ext>`` and addressed by their
    public URL; delete() maps the URL back to the object key.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        public_base_url: str = "",
        prefix: str = "media",
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.prefix = prefix.strip("/")
        self.public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self._client = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3MediaStore":
        return cls(
            bucket=settings.MEDIA_BUCKET,
            region=settings.AWS_REGION,
            public_base_url=settings.MEDIA_PUBLIC_BASE_URL,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        )

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            if self.aws_access_key_id and self.aws_secret_access_key:
                self._client = boto3.client(
                    "s3",
                    region_name=self.region,
                    aws_access_key_id=self.aws_access_key_id,
                    aws_secret_access_key=self.aws_secret_access_key,
                )
            else:
                # Use default credentials (IAM role, environment, etc.)
                self._client = boto3.client("s3", region_name=self.region)
        return self._client

    def key_for_url(self, url: str) -> Optional[str]:
        """Object key for a URL produced by this store, None for foreign URLs."""
        base = self.public_base_url + "/"
        if not url.startswith(base):
            return None
        # Drop any query string a CDN may have appended
        return urlparse(url[len(base):]).path or None

    async def store(self, data: bytes, filename: str, content_type: Optional[str] = None) -> str:
        """
        Upload bytes and return the public URL.

        Raises:
            ExternalServiceError: If S3 rejects the upload
        """
        extension = PurePosixPath(filename).suffix.lower()
        key = f"{self.prefix}/{uuid.uuid4().hex}{extension}"
        content_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload {key} to {self.bucket}: {e}")
            raise ExternalServiceError("media-store", "Media upload failed") from e

        logger.info(f"Stored media object {key} ({len(data)} bytes)")
        return f"{self.public_base_url}/{key}"

    async def delete(self, url: str) -> None:
        """
        Delete the object behind a URL.

        Raises:
            ExternalServiceError: If S3 rejects the deletion
        """
        key = self.key_for_url(url)
        if key is None:
            logger.info(f"Skipping delete of foreign media URL {url}")
            return

        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise ExternalServiceError("media-store", "Media deletion failed") from e

        logger.info(f"Deleted media object {key}")
