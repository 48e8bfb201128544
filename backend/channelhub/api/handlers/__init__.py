"""
API Handlers

Route handlers for the ChannelHub API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from channelhub.api.handlers import (
    auth_handler,
    channel_handler,
    health_handler,
    user_handler,
)

__all__ = [
    "auth_handler",
    "channel_handler",
    "health_handler",
    "user_handler",
]
