"""
Session Guard

Turns an incoming access token into an authenticated principal.

Token Sources:
==============
1. accessToken cookie        (browser clients)
2. Authorization: Bearer ... (API clients)

The cookie wins when both are present. Verification is purely
cryptographic: no store access, so a revoked session keeps working until
its access token expires.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from channelhub.shared.core.exceptions import AuthenticationError, AuthFailure
from channelhub.shared.core.logging import get_logger
from channelhub.shared.services.token_service import TokenCodec
from channelhub.shared.utils.security import TokenDecodeError


logger = get_logger("channelhub.auth")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Principal attached to a request."""

    user_id: UUID
    email: str
    handle: str


class SessionGuard:
    """Access-token verification for incoming requests."""

    def __init__(self, codec: Optional[TokenCodec] = None) -> None:
        self.codec = codec or TokenCodec.from_settings()

    def authenticate(
        self,
        cookie_token: Optional[str] = None,
        header_token: Optional[str] = None,
    ) -> AuthenticatedUser:
        """
        Verify the access token from the cookie or the Authorization header.

        Raises:
            AuthenticationError: If the token is missing, expired, forged or
                does not carry a user identity
        """
        token = cookie_token or header_token
        if not token:
            raise AuthenticationError("Unauthorized request", reason=AuthFailure.MISSING)

        try:
            payload = self.codec.decode_access_token(token)
        except TokenDecodeError as e:
            reason = AuthFailure.EXPIRED if e.expired else AuthFailure.MALFORMED
            logger.info("Access token rejected", reason=reason.value)
            raise AuthenticationError("Invalid access token", reason=reason) from e

        try:
            return AuthenticatedUser(
                user_id=UUID(str(payload["user_id"])),
                email=payload.get("email", ""),
                handle=payload.get("handle", ""),
            )
        except (KeyError, ValueError) as e:
            logger.info("Access token rejected", reason=AuthFailure.MALFORMED.value)
            raise AuthenticationError("Invalid access token", reason=AuthFailure.MALFORMED) from e
