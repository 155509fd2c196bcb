"""User model for portal accounts.

This module defines the User model which represents everyone who can sign
in to the portal: staff working through onboarding and the administrators
who manage them. A user's role decides which checklist template they are
onboarded with; their status gates access to the staff area.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.core.clock import utcnow

if TYPE_CHECKING:
    from app.models.checklist import UserChecklist
    from app.models.notification import Notification
    from app.models.token import EmailVerificationToken, PasswordResetToken


class Role(str, Enum):
    """Job role. Every non-admin role has its own checklist template."""
    ADMIN = "ADMIN"
    CS = "CS"
    PROVIDER = "PROVIDER"
    RN = "RN"
    MA_BACKOFFICE = "MA_BACKOFFICE"


ROLE_NAMES = {
    Role.ADMIN: "Administrator",
    Role.CS: "Customer Service",
    Role.PROVIDER: "Provider",
    Role.RN: "Registered Nurse",
    Role.MA_BACKOFFICE: "Medical Assistant / Back Office",
}


class UserStatus(str, Enum):
    """Account approval state. Self sign-ups start PENDING."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class User(SQLModel, table=True):
    """A portal account.

    Attributes:
        id: Unique identifier (UUID).
        email: Login email, always stored lowercased (unique).
        name: Display name.
        password_hash: bcrypt hash of the password.
        role: Job role; selects the checklist template.
        status: Approval state. Only APPROVED users have a checklist.
        email_verified: When the email address was confirmed, if ever.
        created_at: Account creation time.
        updated_at: Last modification of the account row.
        checklist: The user's personal onboarding checklist, if created.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str | None = None
    password_hash: str | None = None
    role: Role = Field(default=Role.CS)
    status: UserStatus = Field(default=UserStatus.PENDING, index=True)
    email_verified: datetime | None = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime, sa_column_kwargs={"onupdate": utcnow}
    )

    # Relationships
    checklist: Optional["UserChecklist"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"uselist": False, "cascade": "all, delete-orphan"},
    )
    notifications: list["Notification"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    reset_tokens: list["PasswordResetToken"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    verification_tokens: list["EmailVerificationToken"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
