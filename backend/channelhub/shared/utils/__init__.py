"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing and JWT management
- validators: Identity field rules (handle, email, display name, password)

Usage:
======
    from channelhub.shared.utils.security import SecurityUtils
    from channelhub.shared.utils.validators import normalize_email
"""

from channelhub.shared.utils.security import SecurityUtils, TokenDecodeError
from channelhub.shared.utils.validators import (
    normalize_handle,
    normalize_display_name,
    normalize_email,
    check_password_strength,
)

__all__ = [
    "SecurityUtils",
    "TokenDecodeError",
    "normalize_handle",
    "normalize_display_name",
    "normalize_email",
    "check_password_strength",
]
