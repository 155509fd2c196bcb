"""Public content shown on the marketing pages: documents and FAQs."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class PublicDoc(SQLModel, table=True):
    """A linked document listed on the public docs page, grouped by category."""
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str
    description: str | None = None
    url: str
    category: str = Field(index=True)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class FAQ(SQLModel, table=True):
    """A frequently asked question."""
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    question: str
    answer: str
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
