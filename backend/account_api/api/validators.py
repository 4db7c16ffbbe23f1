"""Request Validators — FastAPI dependencies that check request bodies.

Invariants:
    - The body must be a JSON object; anything else is a 400
    - Each validator raises InvalidFieldError for the FIRST violated rule only
    - Validators never touch the database
    - Rules come from core/validate_fields.py (shared with the service)

Design Decisions:
    - Raw JSON over Pydantic body models: rules like "age is a number, not a
      numeric string" and first-violation-only messages are expressed directly
      by the shared predicates instead of being re-encoded as schema constraints
    - json_body is a dependency so FastAPI caches one parse per request
"""

from fastapi import Depends, Request

from account_api.core.domain_types import PROFILE_FIELDS
from account_api.core.errors import InvalidFieldError
from account_api.core.validate_fields import (
    check_email, check_password, check_profile_fields,
)


async def json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise InvalidFieldError("Request body must be a JSON object", "body")
    return body


def _raise_on(message: str | None, field: str) -> None:
    if message:
        raise InvalidFieldError(message, field)


def validate_email(body: dict = Depends(json_body)) -> str:
    email = body.get("email")
    _raise_on(check_email(email), "email")
    return email


def validate_password(body: dict = Depends(json_body)) -> str:
    password = body.get("password")
    _raise_on(check_password(password), "password")
    return password


def require_password(body: dict = Depends(json_body)) -> str:
    """Login only needs a password to be present; strength rules apply at signup."""
    password = body.get("password")
    if not isinstance(password, str) or not password:
        raise InvalidFieldError("Password is required", "password")
    return password


def validate_profile_update(body: dict = Depends(json_body)) -> dict:
    """Check name/bio/age/phone when present. Returns only those keys."""
    violation = check_profile_fields(body)
    if violation:
        field, message = violation
        raise InvalidFieldError(message, field)
    return {k: body[k] for k in PROFILE_FIELDS if k in body}
