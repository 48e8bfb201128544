"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ MediaStore

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, login, refresh and logout
- CredentialService: User records, passwords, profile and image updates
- TokenService / TokenCodec: Token pair lifecycle and signing
- SessionGuard: Access token verification for incoming requests
- ChannelService: Channel profiles and watch history (read-only)
- SubscriptionService: Subscribe / unsubscribe

Usage:
======
    from channelhub.shared.services import AuthService

    service = AuthService(db, media_store)
    result = await service.login("alice", password)
"""

from channelhub.shared.services.auth_service import AuthService
from channelhub.shared.services.channel_service import ChannelService
from channelhub.shared.services.credential_service import CredentialService
from channelhub.shared.services.session_guard import AuthenticatedUser, SessionGuard
from channelhub.shared.services.subscription_service import SubscriptionService
from channelhub.shared.services.token_service import TokenCodec, TokenService

__all__ = [
    "AuthService",
    "AuthenticatedUser",
    "ChannelService",
    "CredentialService",
    "SessionGuard",
    "SubscriptionService",
    "TokenCodec",
    "TokenService",
]
