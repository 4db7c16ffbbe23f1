"""Account Service — business rules for registration, profiles, and login.

Invariants:
    - Passwords are hashed before they reach the repository; plaintext is never stored
    - Email is normalized before every lookup and insert
    - The repository's unique constraint is authoritative; the find_by_email
      pre-check only avoids a wasted bcrypt hash in the common case
    - update_profile forwards name/bio/age/phone only; other keys are dropped
    - authenticate raises the same InvalidCredentialsError for an unknown email
      and a wrong password, and spends one bcrypt verification in both cases
    - get_profile, authenticate, and list_accounts return public views (no password)

Design Decisions:
    - register_account and update_profile return the ORM account: the route
      decides how to present it (ADR: thin controller, single public_view)
    - Gateway errors are re-raised as service errors so routes only see
      business failures (NotFoundError → AccountNotFoundError,
      ConstraintViolationError on the email → DuplicateAccountError)
"""

import logging

from account_api.core.account_view import public_view
from account_api.core.domain_types import AccountId, PROFILE_FIELDS
from account_api.core.errors import (
    AccountNotFoundError, ConstraintViolationError, DuplicateAccountError,
    InvalidCredentialsError, InvalidFieldError, NotFoundError,
)
from account_api.core.repository_protocols import (
    EMAIL_UNIQUE_CONSTRAINT, AccountLike, AccountRepository, PasswordHasher,
)
from account_api.core.validate_fields import is_valid_age, normalize_email

logger = logging.getLogger(__name__)


def _profile_subset(fields: dict | None) -> dict:
    return {k: v for k, v in (fields or {}).items() if k in PROFILE_FIELDS}


class AccountService:
    """Account business logic over a repository and a password hasher."""

    def __init__(self, repository: AccountRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    async def register_account(
        self, email: str, password: str, profile: dict | None = None,
    ) -> AccountLike:
        """Create an account. Raises DuplicateAccountError if the email is taken."""
        email = normalize_email(email)
        if await self.repository.find_by_email(email):
            raise DuplicateAccountError()

        hashed = await self.hasher.hash(password)
        try:
            return await self.repository.create({
                "email": email,
                "password": hashed,
                **_profile_subset(profile),
            })
        except ConstraintViolationError as e:
            if e.constraint != EMAIL_UNIQUE_CONSTRAINT:
                raise
            # Lost a race with a concurrent registration for the same email
            raise DuplicateAccountError()

    async def update_profile(
        self, account_id: AccountId, fields: dict,
    ) -> AccountLike:
        """Apply a profile update. Raises AccountNotFoundError or InvalidFieldError."""
        if not await self.repository.find_by_id(account_id):
            raise AccountNotFoundError(account_id)

        updates = _profile_subset(fields)
        if "age" in updates and not is_valid_age(updates["age"]):
            raise InvalidFieldError("Invalid age", "age")
        if "age" in updates:
            updates["age"] = int(updates["age"])

        try:
            account = await self.repository.update(account_id, updates)
        except NotFoundError:
            raise AccountNotFoundError(account_id)
        logger.info(
            f"Profile updated ({', '.join(sorted(updates)) or 'no fields'})",
            extra={"account_id": account_id},
        )
        return account

    async def get_profile(self, account_id: AccountId) -> dict:
        account = await self.repository.find_by_id(account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return public_view(account)

    async def authenticate(self, email: str, password: str) -> dict:
        """Check credentials. Raises InvalidCredentialsError on any mismatch."""
        account = await self.repository.find_by_email(normalize_email(email))
        if account is None:
            await self.hasher.verify_decoy(password)
            raise InvalidCredentialsError()
        if not await self.hasher.verify(password, account.password):
            raise InvalidCredentialsError()
        return public_view(account)

    async def list_accounts(self, skip: int = 0, take: int = 10) -> list[dict]:
        accounts = await self.repository.list_page(skip=skip, take=take)
        return [public_view(a) for a in accounts]
