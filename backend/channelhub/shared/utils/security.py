"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
Uses bcrypt (via passlib) with automatic salt generation. The work factor is
BCRYPT_ROUNDS (12 in production; the test-suite lowers it).

JWT Tokens:
===========
Uses PyJWT. Every token gets:
- exp / iat: standard expiry and issued-at claims
- jti: random id, so two tokens with the same payload issued in the
  same second are still different strings
- type: "access" or "refresh", checked on decode

Usage:
======
    from channelhub.shared.utils.security import SecurityUtils, TokenDecodeError

    hashed = SecurityUtils.hash_password("S3cure!pass")
    SecurityUtils.verify_password("S3cure!pass", hashed)   # True

    token = SecurityUtils.create_token(
        data={"user_id": "123"},
        secret_key="secret",
        token_type="refresh",
        expires_delta=timedelta(days=10),
    )

    try:
        payload = SecurityUtils.decode_token(token, "secret", token_type="refresh")
    except TokenDecodeError as e:
        e.expired  # True if only the expiry check failed
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from channelhub.config.settings import settings
from channelhub.shared.utils.validators import PASSWORD_MAX_BYTES


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenDecodeError(ValueError):
    """
    Token could not be decoded.

    Attributes:
        expired: True when the signature was valid but the token has expired
    """

    def __init__(self, message: str, expired: bool = False) -> None:
        super().__init__(message)
        self.expired = expired


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT token creation and validation
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Returns:
            Bcrypt hash string (includes salt and cost)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against bcrypt hash.

        Candidates over 72 bytes never match: bcrypt would only compare
        their prefix.

        Returns:
            True if password matches, False otherwise (also for empty input)
        """
        if not plain_password or not hashed_password:
            return False
        if len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            return False
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_token(
        data: dict,
        secret_key: str,
        token_type: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Payload data to encode (e.g., user_id, email)
            secret_key: Secret key for signing
            token_type: "access" or "refresh"
            expires_delta: Token lifetime (default: 15 minutes)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + (expires_delta or timedelta(minutes=15)),
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_token(
        token: str,
        secret_key: str,
        token_type: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify a JWT.

        Args:
            token: JWT token string
            secret_key: Secret key used for signing
            token_type: Expected "type" claim
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Decoded token payload

        Raises:
            TokenDecodeError: If token is expired, invalid or of another type
        """
        try:
            payload = jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenDecodeError("Token has expired", expired=True) from e
        except jwt.InvalidTokenError as e:
            raise TokenDecodeError(f"Invalid token: {str(e)}") from e

        if payload.get("type") != token_type:
            raise TokenDecodeError(f"Expected a {token_type} token")

        return payload
