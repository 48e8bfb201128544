"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, OptionalUser
- Services: get_*_service() functions, get_media_store(), read_upload()

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: AuthenticatedUser = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):

Usage:
======
    from channelhub.api.dependencies import CurrentUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser, service=Depends(get_credential_service)):
        return await service.get_profile(current_user.user_id)
"""

from channelhub.api.dependencies.database import (
    get_db,
    DbSession,
)
from channelhub.api.dependencies.auth import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_current_user,
    get_optional_user,
    CurrentUser,
    OptionalUser,
)
from channelhub.api.dependencies.services import (
    get_auth_service,
    get_channel_service,
    get_credential_service,
    get_media_store,
    get_subscription_service,
    read_upload,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "ACCESS_TOKEN_COOKIE",
    "REFRESH_TOKEN_COOKIE",
    "get_current_user",
    "get_optional_user",
    "CurrentUser",
    "OptionalUser",
    # Services
    "get_auth_service",
    "get_channel_service",
    "get_credential_service",
    "get_media_store",
    "get_subscription_service",
    "read_upload",
]
