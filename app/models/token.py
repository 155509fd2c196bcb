"""Single-use account tokens for password reset and email verification."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.core.clock import utcnow

if TYPE_CHECKING:
    from app.models.user import User


class PasswordResetToken(SQLModel, table=True):
    """Token emailed to a user who asked to reset their password.

    Attributes:
        token: Random hex string embedded in the reset link (unique).
        expires: After this time the token is rejected.
        used: Set in the same transaction that changes the password.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(index=True, unique=True)
    user_id: UUID = Field(foreign_key="user.id", ondelete="CASCADE")
    expires: datetime = Field(sa_type=DateTime)
    used: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    # Relationship
    user: Optional["User"] = Relationship(back_populates="reset_tokens")

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires


class EmailVerificationToken(SQLModel, table=True):
    """Token emailed to confirm ownership of an email address."""
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(index=True, unique=True)
    user_id: UUID = Field(foreign_key="user.id", ondelete="CASCADE")
    expires: datetime = Field(sa_type=DateTime)
    used: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    # Relationship
    user: Optional["User"] = Relationship(back_populates="verification_tokens")

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires
