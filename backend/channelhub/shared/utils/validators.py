"""
Input Validators

Format, length and policy rules for identity fields. Every function returns
the normalised value or raises ValidationError with the offending field in
``details``.

Rules:
======
    handle        3-15 chars, letters and spaces, stored lower-cased
    display_name  3-15 chars, letters and spaces
    email         RFC-valid address (email-validator), stored lower-cased
    password      8-72 chars with upper, lower, digit and symbol
"""

import re

from email_validator import EmailNotValidError, validate_email

from channelhub.shared.core.exceptions import ValidationError


NAME_PATTERN = re.compile(r"^[A-Za-z ]+$")
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 15

PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72


def _required(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", details={"field": field})
    return value.strip()


def _name(value: str | None, field: str) -> str:
    value = _required(value, field)
    if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"{field} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters long",
            details={"field": field},
        )
    if not NAME_PATTERN.match(value):
        raise ValidationError(
            f"{field} can only contain letters and spaces",
            details={"field": field},
        )
    return value


def normalize_handle(value: str | None) -> str:
    """Validate a channel handle and lower-case it."""
    return _name(value, "handle").lower()


def normalize_display_name(value: str | None) -> str:
    """Validate a display name."""
    return _name(value, "display_name")


def normalize_email(value: str | None) -> str:
    """Validate an email address and lower-case it."""
    value = _required(value, "email")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Please provide a valid email address", details={"field": "email"}) from e
    return value.lower()


def check_password_strength(password: str | None, field: str = "password") -> str:
    """
    Enforce the password policy.

    Returns:
        The password unchanged (passwords are never trimmed or re-cased)
    """
    if not password:
        raise ValidationError(f"{field} is required", details={"field": field})

    problems = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"at least {PASSWORD_MIN_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        problems.append(f"at most {PASSWORD_MAX_BYTES} bytes")
    if not re.search(r"[a-z]", password):
        problems.append("a lowercase letter")
    if not re.search(r"[A-Z]", password):
        problems.append("an uppercase letter")
    if not re.search(r"\d", password):
        problems.append("a number")
    if not re.search(r"[^A-Za-z0-9\s]", password):
        problems.append("a symbol")

    if problems:
        raise ValidationError(
            "Password must contain " + ", ".join(problems),
            details={"field": field},
        )
    return password
