"""Dependency Wiring — builds repository, hasher, and service per request.

Invariants:
    - One AccountService per request, bound to that request's AsyncSession
    - The password hasher is process-wide (its decoy hash is computed once)

Design Decisions:
    - Plain FastAPI Depends chain over a DI container: three providers do not
      justify a framework
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from account_api.config import get_settings
from account_api.infrastructure.account_repository import SqlAccountRepository
from account_api.infrastructure.database import get_db
from account_api.infrastructure.password_hasher import BcryptPasswordHasher
from account_api.services.account_service import AccountService


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_account_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(repository, hasher)
