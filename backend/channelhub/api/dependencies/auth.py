"""
Authentication Dependencies

FastAPI dependencies that run the Session Guard on incoming requests.

Token Sources:
==============
    accessToken cookie  ─┐
                         ├──► SessionGuard.authenticate() ──► AuthenticatedUser
    Authorization header ┘    (cookie wins when both are sent)

Type Aliases:
=============
    CurrentUser   - Authenticated user; 401 if no valid access token
    OptionalUser  - Authenticated user or None for anonymous requests

Usage:
======
    from channelhub.api.dependencies.auth import CurrentUser, OptionalUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user.user_id
"""

from typing import Annotated, Optional

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from channelhub.shared.services.session_guard import AuthenticatedUser, SessionGuard
from channelhub.shared.services.token_service import TokenCodec


ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

# auto_error=False: a missing header is fine when the cookie carries the token
security = HTTPBearer(auto_error=False)


def get_token_codec(request: Request) -> TokenCodec:
    """Token codec configured at startup."""
    codec = getattr(request.app.state, "token_codec", None)
    return codec or TokenCodec.from_settings()


def get_session_guard(
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> SessionGuard:
    return SessionGuard(codec)


async def get_current_user(
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
    access_token: Annotated[Optional[str], Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> AuthenticatedUser:
    """
    Get the authenticated user from the access token.

    Raises:
        AuthenticationError: If no token is sent or it does not verify
    """
    return guard.authenticate(
        cookie_token=access_token,
        header_token=credentials.credentials if credentials else None,
    )


async def get_optional_user(
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
    access_token: Annotated[Optional[str], Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> Optional[AuthenticatedUser]:
    """
    Like get_current_user, but anonymous requests yield None.

    A token that is sent but does not verify is still rejected.
    """
    header_token = credentials.credentials if credentials else None
    if not access_token and not header_token:
        return None
    return guard.authenticate(cookie_token=access_token, header_token=header_token)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

# Authenticated user (most common dependency)
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]

# Anonymous allowed
OptionalUser = Annotated[Optional[AuthenticatedUser], Depends(get_optional_user)]
