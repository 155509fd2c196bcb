"""In-app notification model."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.core.clock import utcnow

if TYPE_CHECKING:
    from app.models.user import User


class NotificationType(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    CHECKLIST_UPDATE = "CHECKLIST_UPDATE"
    ACCOUNT_APPROVED = "ACCOUNT_APPROVED"
    NEW_DOCUMENT = "NEW_DOCUMENT"
    ANNOUNCEMENT = "ANNOUNCEMENT"


class Notification(SQLModel, table=True):
    """A message shown in a user's notification dropdown.

    Attributes:
        link: Optional in-app path the notification points to.
        read: Whether the user has dismissed it.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True, ondelete="CASCADE")
    type: NotificationType = Field(default=NotificationType.INFO)
    title: str
    message: str
    link: str | None = None
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    # Relationship
    user: Optional["User"] = Relationship(back_populates="notifications")
