"""Access Enforcement — pure identity and authorization rules.

Invariants:
    - resolve_caller is the ONLY place a CallerIdentity is built from raw headers
    - A malformed target id is InvalidTargetError (400), never ForbiddenError
    - Ids are bounded to [ACCOUNT_ID_MIN, ACCOUNT_ID_MAX] for both the caller
      header and the path, so no out-of-range int reaches the driver
    - Owners may always reach their own account; the admin role may reach any

Design Decisions:
    - Header values are passed in as plain strings: core stays free of FastAPI
      (ADR: functional core, imperative shell)
    - A non-numeric x-user-id is treated as a missing identity: there is no
      account it could refer to
"""

from account_api.core.domain_types import (
    ACCOUNT_ID_MAX, ACCOUNT_ID_MIN, AccountId, CallerIdentity,
)
from account_api.core.errors import (
    ForbiddenError, InvalidTargetError, UnauthenticatedError,
)


def _parse_account_id(raw: str | None) -> AccountId | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw.isdigit() or not raw.isascii():
        return None
    value = int(raw)
    if not ACCOUNT_ID_MIN <= value <= ACCOUNT_ID_MAX:
        return None
    return AccountId(value)


def resolve_caller(user_id: str | None, role: str | None) -> CallerIdentity:
    """Build the caller identity or raise UnauthenticatedError."""
    account_id = _parse_account_id(user_id)
    if account_id is None:
        raise UnauthenticatedError()
    return CallerIdentity(account_id=account_id, role=role or None)


def parse_target_id(raw: str) -> AccountId:
    """Parse the path-addressed id or raise InvalidTargetError."""
    account_id = _parse_account_id(raw)
    if account_id is None:
        raise InvalidTargetError(raw)
    return account_id


def enforce_admin_role(caller: CallerIdentity, admin_role: str) -> None:
    if not caller.has_role(admin_role):
        raise ForbiddenError("Forbidden: Admin access required")


def enforce_owner_or_admin(
    caller: CallerIdentity, target: AccountId, admin_role: str,
) -> None:
    if caller.account_id != target and not caller.has_role(admin_role):
        raise ForbiddenError("Forbidden: Cannot access other user resources")
