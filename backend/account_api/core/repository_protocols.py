"""Boundary Protocols — contracts between core/services and the shell.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy or bcrypt directly
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
      (database round-trips, bcrypt in a worker thread)
"""

from datetime import datetime
from typing import Protocol

from account_api.core.domain_types import AccountId


class AccountLike(Protocol):
    """Structural contract for Account objects passed between layers.

    Avoids coupling services to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int
    email: str
    password: str
    name: str | None
    bio: str | None
    age: int | None
    phone: str | None
    created_at: datetime


# Constraint name carried by ConstraintViolationError when create() hits a taken email
EMAIL_UNIQUE_CONSTRAINT = "accounts.email unique"


class AccountRepository(Protocol):
    """Contract for account persistence — implemented by shell."""
    async def find_by_id(self, account_id: AccountId) -> AccountLike | None: ...
    async def find_by_email(self, email: str) -> AccountLike | None: ...
    async def create(self, fields: dict) -> AccountLike: ...
    async def update(self, account_id: AccountId, fields: dict) -> AccountLike: ...
    async def delete(self, account_id: AccountId) -> AccountLike: ...
    async def list_page(self, skip: int = 0, take: int = 10) -> list[AccountLike]: ...


class PasswordHasher(Protocol):
    """Contract for one-way password hashing — implemented by shell."""
    async def hash(self, password: str) -> str: ...
    async def verify(self, password: str, hashed: str) -> bool: ...
    async def verify_decoy(self, password: str) -> None: ...