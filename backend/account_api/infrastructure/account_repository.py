"""Account Repository — SQLAlchemy implementation of the AccountRepository protocol.

Invariants:
    - Every statement is built with the SQLAlchemy expression language (bound
      parameters), never with string interpolation
    - find_* return None on a miss; update/delete raise NotFoundError
    - A constraint violation on insert rolls back and raises
      ConstraintViolationError naming the constraint, never a raw IntegrityError
    - update writes profile columns only (PROFILE_FIELDS)

Design Decisions:
    - Repository commits its own writes: each write is one unit of work and the
      caller gets a refreshed row back
    - list_page breaks created_at ties by id so pages are stable
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_api.core.domain_types import AccountId, PROFILE_FIELDS
from account_api.core.errors import ConstraintViolationError, NotFoundError
from account_api.core.repository_protocols import EMAIL_UNIQUE_CONSTRAINT
from account_api.models.account import Account

logger = logging.getLogger(__name__)

_CREATE_FIELDS: tuple[str, ...] = ("email", "password", *PROFILE_FIELDS)


def _constraint_name(error: IntegrityError) -> str:
    """Label the violated constraint from the driver error (SQLite or PostgreSQL)."""
    sqlstate = getattr(error.orig, "sqlstate", None)
    message = str(error.orig).lower().replace("-", " ")
    # email is the only unique column an insert can collide on
    if sqlstate == "23505" or "unique constraint" in message:
        return EMAIL_UNIQUE_CONSTRAINT
    if sqlstate == "23502" or "not null constraint" in message:
        return "accounts not null"
    return "accounts integrity"


class SqlAccountRepository:
    """Account persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        return await self.db.get(Account, account_id)

    async def find_by_email(self, email: str) -> Account | None:
        result = await self.db.execute(
            select(Account).where(Account.email == email),
        )
        return result.scalar_one_or_none()

    async def create(self, fields: dict) -> Account:
        account = Account(
            **{k: v for k, v in fields.items() if k in _CREATE_FIELDS},
        )
        self.db.add(account)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Account insert rejected by constraint: {e.orig}")
            raise ConstraintViolationError(_constraint_name(e))
        await self.db.refresh(account)
        logger.info("Account created", extra={"account_id": account.id})
        return account

    async def update(self, account_id: AccountId, fields: dict) -> Account:
        account = await self._get_or_raise(account_id)
        for name, value in fields.items():
            if name in PROFILE_FIELDS:
                setattr(account, name, value)
        await self.db.commit()
        await self.db.refresh(account)
        return account

    async def delete(self, account_id: AccountId) -> Account:
        account = await self._get_or_raise(account_id)
        await self.db.delete(account)
        await self.db.commit()
        logger.info("Account deleted", extra={"account_id": account_id})
        return account

    async def list_page(self, skip: int = 0, take: int = 10) -> list[Account]:
        result = await self.db.execute(
            select(Account)
            .order_by(Account.created_at.desc(), Account.id.desc())
            .offset(skip)
            .limit(take),
        )
        return list(result.scalars().all())

    async def _get_or_raise(self, account_id: AccountId) -> Account:
        account = await self.db.get(Account, account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account
