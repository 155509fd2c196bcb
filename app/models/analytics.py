"""Analytics event log."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class AnalyticsEventType(str, Enum):
    PAGE_VIEW = "page_view"
    CHECKLIST_COMPLETE = "checklist_complete"
    TASK_COMPLETE = "task_complete"
    TASK_START = "task_start"
    LOGIN = "login"
    LOGOUT = "logout"
    DOCUMENT_VIEW = "document_view"
    SEARCH = "search"
    USER_CREATED = "user_created"
    TEMPLATE_SYNCED = "template_synced"
    CONTACT_FORM_SUBMIT = "contact_form_submit"


class AnalyticsEvent(SQLModel, table=True):
    """One recorded occurrence of something worth counting.

    Attributes:
        user_id: Acting user, if any. Not a foreign key so the log outlives
            deleted accounts.
        metadata_json: Free-form JSON payload.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    type: AnalyticsEventType = Field(index=True)
    user_id: UUID | None = Field(default=None, index=True)
    metadata_json: str | None = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
