"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, response envelopes, error responses
- user: Account and authentication schemas
- channel: Channel profile and watch history read models

Usage:
======
    from channelhub.shared.schemas.user import UserResponse, AuthResponse
    from channelhub.shared.schemas.common import ApiResponse, ErrorResponse
"""

from channelhub.shared.schemas.common import (
    BaseSchema,
    ApiResponse,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from channelhub.shared.schemas.user import (
    UserLogin,
    RefreshTokenRequest,
    ChangePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
    TokenPair,
    AuthResponse,
)
from channelhub.shared.schemas.channel import (
    ChannelProfileResponse,
    PublisherSummary,
    WatchHistoryItem,
    SubscriptionStatus,
)

__all__ = [
    # Common
    "BaseSchema",
    "ApiResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserLogin",
    "RefreshTokenRequest",
    "ChangePasswordRequest",
    "UpdateProfileRequest",
    "UserResponse",
    "TokenPair",
    "AuthResponse",
    # Channel
    "ChannelProfileResponse",
    "PublisherSummary",
    "WatchHistoryItem",
    "SubscriptionStatus",
]
