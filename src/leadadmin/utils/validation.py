import re
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Optional

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# Malaysian mobile numbers, e.g. 012-3456789 or +60123456789
PHONE_PATTERN = re.compile(r'^(\+?6?01)[0-46-9]-*[0-9]{7,8}$')
USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]+$')

PasswordStrength = Literal["weak", "medium", "strong"]


@dataclass(frozen=True)
class ValidationRule:
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    custom: Optional[Callable[[Any], bool]] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class PasswordCheck:
    is_valid: bool
    strength: PasswordStrength
    issues: list[str]


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(re.sub(r'\s', '', phone)))


def validate_password_strength(password: str) -> PasswordCheck:
    issues = []

    if len(password) < 8:
        issues.append('Password must be at least 8 characters long')
    if not re.search(r'[A-Z]', password):
        issues.append('Password must contain at least one uppercase letter')
    if not re.search(r'[a-z]', password):
        issues.append('Password must contain at least one lowercase letter')
    if not re.search(r'[0-9]', password):
        issues.append('Password must contain at least one number')
    if not re.search(r'[!@#$%^&*]', password):
        issues.append('Password must contain at least one special character (!@#$%^&*)')

    if not issues:
        strength = "strong"
    elif len(issues) <= 2:
        strength = "medium"
    else:
        strength = "weak"

    return PasswordCheck(is_valid=not issues, strength=strength, issues=issues)


def validate_field(value: Any, rule: ValidationRule) -> Optional[str]:
    """Return the first error message for value, or None when it passes."""
    text = "" if value is None else str(value)

    if rule.required and not text.strip():
        return rule.message or 'This field is required'

    # Remaining checks only apply to values that were actually provided
    if not value:
        return None

    if rule.min_length is not None and len(text) < rule.min_length:
        return rule.message or f'Minimum length is {rule.min_length} characters'

    if rule.max_length is not None and len(text) > rule.max_length:
        return rule.message or f'Maximum length is {rule.max_length} characters'

    if rule.pattern is not None and not rule.pattern.search(text):
        return rule.message or 'Invalid format'

    if rule.custom is not None and not rule.custom(value):
        return rule.message or 'Invalid value'

    return None


def validate_form(
    data: Mapping[str, Any],
    rules: Mapping[str, ValidationRule],
) -> tuple[bool, dict[str, str]]:
    errors = {}
    for field, rule in rules.items():
        error = validate_field(data.get(field), rule)
        if error:
            errors[field] = error
    return not errors, errors


_SANITIZE_TABLE = str.maketrans({
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#x27;',
    '/': '&#x2F;',
})


def sanitize_input(value: str) -> str:
    """Escape characters that could open HTML markup."""
    return value.translate(_SANITIZE_TABLE)


COMMON_RULES = {
    "email": ValidationRule(
        required=True,
        pattern=EMAIL_PATTERN,
        message='Please enter a valid email address',
    ),
    "phone": ValidationRule(
        required=True,
        pattern=PHONE_PATTERN,
        message='Please enter a valid Malaysian phone number',
    ),
    "password": ValidationRule(
        required=True,
        min_length=8,
        message='Password must be at least 8 characters long',
    ),
    "username": ValidationRule(
        required=True,
        min_length=3,
        max_length=20,
        pattern=USERNAME_PATTERN,
        message='Username must be 3-20 characters and contain only letters, numbers, and underscores',
    ),
    "required": ValidationRule(
        required=True,
        message='This field is required',
    ),
}
