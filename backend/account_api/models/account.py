"""Account ORM — persists the single user-account entity.

Invariants:
    - id is an autoincrement integer primary key, assigned by the database
    - email is unique (index-backed); the database constraint is authoritative
    - password holds a bcrypt hash, never plaintext
    - created_at is set once at insert time (UTC)

Design Decisions:
    - bio and phone as Text: length rules live in core/validate_fields.py,
      the column does not duplicate them
    - name as String(100): matches the validated maximum
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from account_api.db.base import Base


class Account(Base):
    """User account — email/password credentials plus optional profile."""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Account id={self.id} email={self.email!r}>"
