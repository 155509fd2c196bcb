"""Personal checklist models: each user's cloned copy of a role template.

A UserChecklist is created once, when the user is approved (or created by
an admin), by cloning the RoleTemplate for their role. Afterwards it is only
appended to by template syncs or mutated in place by its owner.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.core.clock import utcnow

if TYPE_CHECKING:
    from app.models.user import User


class ItemStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class UserChecklist(SQLModel, table=True):
    """A user's onboarding checklist.

    Attributes:
        id: Unique identifier (UUID).
        user_id: Owner (unique; one checklist per user).
        created_at: When onboarding started. Used as day zero by insights.
        updated_at: Last activity on the checklist, touched whenever one of
            its items changes status.
        sections: Ordered checklist sections.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", unique=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    # Relationships
    user: Optional["User"] = Relationship(back_populates="checklist")
    sections: list["UserSection"] = Relationship(
        back_populates="checklist",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "UserSection.order",
        },
    )

    @property
    def items(self) -> list["UserItem"]:
        """All items across sections, in display order."""
        return [item for section in self.sections for item in section.items]


class UserSection(SQLModel, table=True):
    """A section of a user's checklist. Identified by title during sync."""
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_checklist_id: UUID = Field(foreign_key="userchecklist.id", ondelete="CASCADE")
    title: str
    order: int = Field(default=0)

    # Relationships
    checklist: Optional[UserChecklist] = Relationship(back_populates="sections")
    items: list["UserItem"] = Relationship(
        back_populates="section",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "UserItem.order",
        },
    )


class UserItem(SQLModel, table=True):
    """A task on a user's checklist.

    Attributes:
        status: Progress of the task.
        completed_at: Set iff status is COMPLETE.
        due_date: Absolute due date, fixed when the item was created.
        stable_key: Derived from (section title, item title) at creation.
            Links the item back to its template origin across syncs.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_section_id: UUID = Field(foreign_key="usersection.id", ondelete="CASCADE")
    title: str
    description: str | None = None
    link_url: str | None = None
    file_url: str | None = None
    status: ItemStatus = Field(default=ItemStatus.NOT_STARTED)
    completed_at: datetime | None = Field(default=None, sa_type=DateTime)
    due_date: datetime | None = Field(default=None, sa_type=DateTime)
    stable_key: str = Field(index=True)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime, sa_column_kwargs={"onupdate": utcnow}
    )

    # Relationship
    section: Optional[UserSection] = Relationship(back_populates="items")

    def set_status(self, status: ItemStatus, now: datetime | None = None) -> None:
        """Change status, keeping completed_at in step with it."""
        self.status = status
        self.completed_at = (now or utcnow()) if status == ItemStatus.COMPLETE else None
