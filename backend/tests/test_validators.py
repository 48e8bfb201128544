import pytest

from channelhub.shared.core.exceptions import ValidationError
from channelhub.shared.utils.validators import (
    check_password_strength,
    normalize_display_name,
    normalize_email,
    normalize_handle,
)


def test_handle_is_trimmed_and_lower_cased():
    assert normalize_handle("  Alice ") == "alice"


@pytest.mark.parametrize("value", ["", "   ", "ab", "a" * 16, "alice_1", "bob@home", None])
def test_invalid_handles_are_rejected(value):
    with pytest.raises(ValidationError) as exc:
        normalize_handle(value)
    assert exc.value.details == {"field": "handle"}


def test_display_name_keeps_case():
    assert normalize_display_name("Alice Smith") == "Alice Smith"


def test_email_is_lower_cased():
    assert normalize_email("Alice@ChannelHub.io") == "alice@channelhub.io"


@pytest.mark.parametrize("value", ["not-an-email", "alice@", "@channelhub.io", ""])
def test_invalid_emails_are_rejected(value):
    with pytest.raises(ValidationError):
        normalize_email(value)


def test_strong_password_passes_unchanged():
    assert check_password_strength(" Str0ng!Pass ") == " Str0ng!Pass "


@pytest.mark.parametrize(
    "password, missing",
    [
        ("Sh0rt!", "at least 8 characters"),
        ("str0ng!pass", "an uppercase letter"),
        ("STR0NG!PASS", "a lowercase letter"),
        ("Strong!Pass", "a number"),
        ("Str0ngPass", "a symbol"),
    ],
)
def test_password_policy_names_what_is_missing(password, missing):
    with pytest.raises(ValidationError) as exc:
        check_password_strength(password)
    assert missing in exc.value.message


def test_password_longer_than_bcrypt_limit_is_rejected():
    with pytest.raises(ValidationError) as exc:
        check_password_strength("Aa1!" + "x" * 70, field="new_password")
    assert exc.value.details == {"field": "new_password"}
