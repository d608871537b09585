import re

import pytest

from leadadmin.utils.validation import (
    COMMON_RULES,
    ValidationRule,
    is_valid_email,
    is_valid_phone,
    sanitize_input,
    validate_field,
    validate_form,
    validate_password_strength,
)


@pytest.mark.parametrize("email, valid", [
    ("admin@example.com", True),
    ("a.b@sub.example.my", True),
    ("admin@example", False),
    ("admin example@x.com", False),
    ("", False),
])
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid


@pytest.mark.parametrize("phone, valid", [
    ("0123456789", True),
    ("012-3456789", True),
    ("+60123456789", True),
    ("011 2345 6789", True),
    ("0153456789", False),
    ("12345", False),
])
def test_is_valid_phone(phone, valid):
    assert is_valid_phone(phone) is valid


class TestPasswordStrength:
    def test_strong(self):
        check = validate_password_strength("Sup3r$ecret")
        assert check.is_valid
        assert check.strength == "strong"
        assert check.issues == []

    def test_medium(self):
        check = validate_password_strength("Password1")
        assert not check.is_valid
        assert check.strength == "medium"
        assert check.issues == ['Password must contain at least one special character (!@#$%^&*)']

    def test_weak(self):
        check = validate_password_strength("abc")
        assert check.strength == "weak"
        assert 'Password must be at least 8 characters long' in check.issues


class TestValidateField:
    def test_required_blank(self):
        assert validate_field("   ", ValidationRule(required=True)) == 'This field is required'

    def test_optional_blank_passes(self):
        assert validate_field("", ValidationRule(min_length=3)) is None

    def test_length_messages(self):
        assert validate_field("ab", ValidationRule(min_length=3)) == 'Minimum length is 3 characters'
        assert validate_field("abcd", ValidationRule(max_length=3)) == 'Maximum length is 3 characters'

    def test_pattern_and_custom(self):
        assert validate_field("abc", ValidationRule(pattern=re.compile(r'^\d+$'))) == 'Invalid format'
        assert validate_field(5, ValidationRule(custom=lambda v: v > 10)) == 'Invalid value'
        assert validate_field(15, ValidationRule(custom=lambda v: v > 10)) is None

    def test_rule_message_overrides_default(self):
        assert validate_field("x", COMMON_RULES["username"]) == (
            'Username must be 3-20 characters and contain only letters, numbers, and underscores'
        )


def test_validate_form_collects_errors():
    is_valid, errors = validate_form(
        {"username": "ok_user", "email": "nope", "password": ""},
        {
            "username": COMMON_RULES["username"],
            "email": COMMON_RULES["email"],
            "password": COMMON_RULES["password"],
        },
    )

    assert not is_valid
    assert errors == {
        "email": 'Please enter a valid email address',
        "password": 'Password must be at least 8 characters long',
    }


def test_validate_form_passes():
    is_valid, errors = validate_form({"phone": "0123456789"}, {"phone": COMMON_RULES["phone"]})
    assert is_valid and errors == {}


def test_sanitize_input():
    assert sanitize_input('<a href="/x">it\'s</a>') == (
        '&lt;a href=&quot;&#x2F;x&quot;&gt;it&#x27;s&lt;&#x2F;a&gt;'
    )
