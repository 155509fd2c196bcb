"""Role template models: the admin-authored checklist blueprints.

A RoleTemplate is never shown to staff directly. It is cloned into a
UserChecklist when a user is approved, and later pushed into existing
checklists by the template sync. Deleting template rows never touches the
user rows cloned from them.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

from app.models.user import Role


class RoleTemplate(SQLModel, table=True):
    """The checklist blueprint for one role.

    Attributes:
        id: Unique identifier (UUID).
        role: Role this template onboards (unique).
        title: Human readable template name.
        sections: Ordered template sections.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role: Role = Field(unique=True, index=True)
    title: str

    # Relationship
    sections: list["TemplateSection"] = Relationship(
        back_populates="template",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "TemplateSection.order",
        },
    )


class TemplateSection(SQLModel, table=True):
    """A titled group of template items.

    Sections are matched to a user's sections by title during sync.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role_template_id: UUID = Field(foreign_key="roletemplate.id", ondelete="CASCADE")
    title: str
    order: int = Field(default=0)

    # Relationships
    template: Optional[RoleTemplate] = Relationship(back_populates="sections")
    items: list["TemplateItem"] = Relationship(
        back_populates="section",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "TemplateItem.order",
        },
    )


class TemplateItem(SQLModel, table=True):
    """A single task in a template section.

    Attributes:
        due_in_days: Relative due date. Converted to an absolute due date
            once, when the item is copied into a user's checklist.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    template_section_id: UUID = Field(foreign_key="templatesection.id", ondelete="CASCADE")
    title: str
    description: str | None = None
    link_url: str | None = None
    file_url: str | None = None
    due_in_days: int | None = None
    order: int = Field(default=0)

    # Relationship
    section: Optional[TemplateSection] = Relationship(back_populates="items")
