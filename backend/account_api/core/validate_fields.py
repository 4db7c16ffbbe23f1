"""Field Validation — pure predicates for every account field.

Invariants:
    - Every check_* function is PURE: takes a value, returns the first violation
      message or None, never raises, never touches storage
    - The same predicates back the request validators (api/validators.py) and the
      service's re-validation of age (services/account_service.py)
    - Only the first violated rule is reported

Design Decisions:
    - Message-or-None over raising: the shell decides which error type to raise
      and which field to attach (ADR: functional core, imperative shell)
    - bool is rejected as an age even though it subclasses int: JSON true/false
      must not pass as 1/0
"""

import re


NAME_MAX_LENGTH: int = 100
BIO_MAX_LENGTH: int = 500
AGE_MIN: int = 0
AGE_MAX: int = 150
PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_BYTES: int = 72  # bcrypt ignores (or rejects) anything longer

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,}$")
_HAS_LETTER = re.compile(r"[a-zA-Z]")
_HAS_DIGIT = re.compile(r"[0-9]")


# ─── Profile fields (optional) ──────────────────────────────────

def check_name(name: object) -> str | None:
    if not isinstance(name, str) or not name.strip():
        return "Name must be a non-empty string"
    if len(name) > NAME_MAX_LENGTH:
        return "Name must be less than 100 characters"
    return None


def check_bio(bio: object) -> str | None:
    if not isinstance(bio, str):
        return "Bio must be a string"
    if len(bio) > BIO_MAX_LENGTH:
        return "Bio must be less than 500 characters"
    return None


def is_valid_age(age: object) -> bool:
    """Integer (or integral float) within [AGE_MIN, AGE_MAX]. bool is not an age."""
    if isinstance(age, bool) or not isinstance(age, (int, float)):
        return False
    if isinstance(age, float) and not age.is_integer():
        return False
    return AGE_MIN <= age <= AGE_MAX


def check_age(age: object) -> str | None:
    if not is_valid_age(age):
        return "Age must be a number between 0 and 150"
    return None


def check_phone(phone: object) -> str | None:
    """None is allowed: it clears the stored phone."""
    if phone is None:
        return None
    if not isinstance(phone, str):
        return "Phone must be a string"
    if not PHONE_PATTERN.fullmatch(phone):
        return "Invalid phone number format"
    return None


_PROFILE_CHECKS = (
    ("name", check_name),
    ("bio", check_bio),
    ("age", check_age),
    ("phone", check_phone),
)


def check_profile_fields(fields: dict) -> tuple[str, str] | None:
    """Check the profile keys present in fields. Returns (field, message) or None."""
    for field_name, check in _PROFILE_CHECKS:
        if field_name not in fields:
            continue
        message = check(fields[field_name])
        if message:
            return field_name, message
    return None


# ─── Credentials (required) ─────────────────────────────────────

def check_email(email: object) -> str | None:
    if email is None or email == "":
        return "Email is required"
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"
    return None


def check_password(password: object) -> str | None:
    if password is None or password == "":
        return "Password is required"
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        return "Password must be at least 8 characters"
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return "Password must be at most 72 bytes"
    if not _HAS_LETTER.search(password) or not _HAS_DIGIT.search(password):
        return "Password must contain at least one letter and one number"
    return None


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()
