"""
Authentication Handler

Handles registration, login, token refresh and logout endpoints.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses (envelopes, cookies)

Business logic belongs in the SERVICE layer, not here. Application
exceptions propagate to the global error handler.

SESSION COOKIES:
================
Login and refresh set two cookies; logout clears them:

    accessToken   httponly, secure, samesite=strict, max-age ACCESS_TOKEN_EXPIRE_MINUTES
    refreshToken  httponly, secure, samesite=strict, max-age REFRESH_TOKEN_EXPIRE_DAYS

The same tokens are returned in the JSON body for non-browser clients.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Cookie, Depends, File, Form, Response, UploadFile, status

from channelhub.api.dependencies.auth import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    CurrentUser,
)
from channelhub.api.dependencies.services import get_auth_service, read_upload
from channelhub.config.settings import settings
from channelhub.shared.schemas.common import ApiResponse, MessageResponse
from channelhub.shared.schemas.user import (
    AuthResponse,
    RefreshTokenRequest,
    TokenPair,
    UserLogin,
    UserResponse,
)
from channelhub.shared.services.auth_service import AuthService


router = APIRouter()


def set_session_cookies(response: Response, pair: TokenPair) -> None:
    """Attach both tokens as http-only cookies."""
    options = {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
    }
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        pair.access_token,
        max_age=settings.access_token_max_age,
        **options,
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        pair.refresh_token,
        max_age=settings.refresh_token_max_age,
        **options,
    )


def clear_session_cookies(response: Response) -> None:
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            name,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite=settings.COOKIE_SAMESITE,
        )


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    handle: Annotated[Optional[str], Form()] = None,
    email: Annotated[Optional[str], Form()] = None,
    display_name: Annotated[Optional[str], Form()] = None,
    password: Annotated[Optional[str], Form()] = None,
    confirm_password: Annotated[Optional[str], Form()] = None,
    avatar: Annotated[Optional[UploadFile], File()] = None,
    cover_image: Annotated[Optional[UploadFile], File()] = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Multipart form with the account fields, a required ``avatar`` file and
    an optional ``cover_image`` file. Does not log the user in.

    Raises:
        400: Invalid fields, password mismatch, missing avatar
        409: Handle or email already registered
    """
    profile = await auth_service.register(
        handle=handle or "",
        email=email or "",
        display_name=display_name or "",
        password=password or "",
        confirm_password=confirm_password or "",
        avatar=await read_upload(avatar, "avatar"),
        cover_image=await read_upload(cover_image, "cover_image"),
    )
    return ApiResponse(data=profile, message="User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: UserLogin,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate by handle or email and start a session.

    Raises:
        401: Wrong password
        404: No user with that handle or email
    """
    result = await auth_service.login(credentials.identifier, credentials.password)
    set_session_cookies(response, result)
    return ApiResponse(data=result, message="User logged in successfully")


@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
async def refresh_token(
    response: Response,
    body: Annotated[Optional[RefreshTokenRequest], Body()] = None,
    cookie_token: Annotated[Optional[str], Cookie(alias=REFRESH_TOKEN_COOKIE)] = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchange the refresh token (cookie first, then body) for a new pair.

    Each refresh token can be used once.

    Raises:
        401: Missing, invalid, expired or already used token
    """
    presented = cookie_token or (body.refresh_token if body else None)
    pair = await auth_service.refresh(presented)
    set_session_cookies(response, pair)
    return ApiResponse(data=pair, message="Access token refreshed")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: CurrentUser,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """End the current session and clear the cookies."""
    await auth_service.logout(current_user.user_id)
    clear_session_cookies(response)
    return MessageResponse(message="User logged out")
