"""
Adapters Package

External service integrations.

Contents:
=========
- media_store: Avatar / cover image storage (MediaStore protocol, S3 implementation)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from channelhub.shared.adapters.media_store import S3MediaStore

    media_store = S3MediaStore.from_settings(settings)
    url = await media_store.store(data, "avatar.png")
"""

from channelhub.shared.adapters.media_store import MediaStore, MediaUpload, S3MediaStore

__all__ = [
    "MediaStore",
    "MediaUpload",
    "S3MediaStore",
]
