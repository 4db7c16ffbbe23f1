"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId wraps int — storage assigns it, nothing else mints one
    - CallerIdentity is immutable: guards produce it, downstream code only reads it
    - PROFILE_FIELDS is the single source of truth for what a profile update may touch

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost (ADR: simplicity)
    - Frozen dataclass for CallerIdentity: passed explicitly through dependencies
      instead of being stashed on the request object
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)

# accounts.id is a 32-bit INTEGER column; ids outside this range address nothing
ACCOUNT_ID_MIN: int = 1
ACCOUNT_ID_MAX: int = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Known caller roles. Any other header value is treated as a plain user."""
    ADMIN = "admin"
    USER = "user"


# ─── Field Sets ──────────────────────────────────────────────────

PROFILE_FIELDS: tuple[str, ...] = ("name", "bio", "age", "phone")


# ─── Caller ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class CallerIdentity:
    """Resolved caller: who is asking and with which role."""
    account_id: AccountId
    role: str | None = None

    def has_role(self, role: str) -> bool:
        return self.role == role
