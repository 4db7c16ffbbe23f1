"""Access Guards — FastAPI dependencies that authenticate and authorize callers.

Invariants:
    - Guards run before validators and before any database session is opened
    - require_auth returns a CallerIdentity; downstream guards receive it as an
      argument, nothing is written onto the request
    - require_owner_or_admin returns the parsed target id for the handler to use

Design Decisions:
    - x-user-id / x-user-role headers stand in for a real auth scheme: they are
      trusted as issued by an upstream gateway, no token verification happens here
    - Rules live in core/enforce_access.py; this module only adapts FastAPI inputs
"""

from fastapi import Depends, Header

from account_api.config import Settings, get_settings
from account_api.core.domain_types import AccountId, CallerIdentity
from account_api.core.enforce_access import (
    enforce_admin_role, enforce_owner_or_admin, parse_target_id, resolve_caller,
)


def require_auth(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> CallerIdentity:
    """Resolve the caller from identity headers or raise 401."""
    return resolve_caller(x_user_id, x_user_role)


def require_admin(
    caller: CallerIdentity = Depends(require_auth),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    enforce_admin_role(caller, settings.admin_role)
    return caller


def require_owner_or_admin(
    account_id: str,
    caller: CallerIdentity = Depends(require_auth),
    settings: Settings = Depends(get_settings),
) -> AccountId:
    """Allow the account's owner or an admin. Returns the target account id."""
    target = parse_target_id(account_id)
    enforce_owner_or_admin(caller, target, settings.admin_role)
    return target
