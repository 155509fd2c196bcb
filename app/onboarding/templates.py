"""Admin management of role templates, their sections and items.

Changes here only affect the blueprint. Existing user checklists pick them
up when an admin runs the template sync.
"""
import logging
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from app.core.auth import Principal, require_admin
from app.models import Role, RoleTemplate, TemplateItem, TemplateSection
from app.onboarding.checklist import get_template as load_template

logger = logging.getLogger(__name__)


def _next_order(session: Session, column, *criteria) -> int:
    """max(order) + 1 among matching rows, 0 when there are none."""
    current = session.exec(select(func.max(column)).where(*criteria)).one()
    return 0 if current is None else current + 1


def list_templates(session: Session, principal: Principal | None) -> list[RoleTemplate]:
    require_admin(principal)
    return list(session.exec(select(RoleTemplate).order_by(RoleTemplate.role)).all())


def get_template(session: Session, principal: Principal | None, role: Role) -> RoleTemplate | None:
    require_admin(principal)
    return load_template(session, role)


def create_template(
    session: Session, principal: Principal | None, role: Role, title: str
) -> dict:
    try:
        require_admin(principal)
        if load_template(session, role) is not None:
            return {"success": False, "error": "Template already exists for this role"}
        template = RoleTemplate(role=role, title=title.strip())
        session.add(template)
        session.commit()
        session.refresh(template)
        return {"success": True, "template": template}
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating template: {e}")
        return {"success": False, "error": "Failed to create template"}


# Section actions

def create_section(
    session: Session, principal: Principal | None, role_template_id: UUID, title: str
) -> dict:
    try:
        require_admin(principal)
        if session.get(RoleTemplate, role_template_id) is None:
            return {"success": False, "error": "Template not found"}

        section = TemplateSection(
            role_template_id=role_template_id,
            title=title.strip(),
            order=_next_order(
                session,
                TemplateSection.order,
                TemplateSection.role_template_id == role_template_id,
            ),
        )
        session.add(section)
        session.commit()
        session.refresh(section)
        return {"success": True, "section": section}
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating section: {e}")
        return {"success": False, "error": "Failed to create section"}


def update_section(
    session: Session, principal: Principal | None, section_id: UUID, title: str
) -> dict:
    """
    Rename a template section.

    User sections are matched by title, so the next sync adds the renamed
    section to every checklist next to the old one.
    """
    try:
        require_admin(principal)
        section = session.get(TemplateSection, section_id)
        if section is None:
            return {"success": False, "error": "Section not found"}
        section.title = title.strip()
        session.add(section)
        session.commit()
        session.refresh(section)
        return {"success": True, "section": section}
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating section: {e}")
        return {"success": False, "error": "Failed to update section"}


def delete_section(session: Session, principal: Principal | None, section_id: UUID) -> dict:
    """Delete a template section and its items. User checklists keep their copies."""
    try:
        require_admin(principal)
        section = session.get(TemplateSection, section_id)
        if section is None:
            return {"success": False, "error": "Section not found"}
        session.delete(section)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting section: {e}")
        return {"success": False, "error": "Failed to delete section"}


# Item actions

def create_item(
    session: Session,
    principal: Principal | None,
    template_section_id: UUID,
    title: str,
    description: str | None = None,
    link_url: str | None = None,
    file_url: str | None = None,
    due_in_days: int | None = None,
) -> dict:
    try:
        require_admin(principal)
        if session.get(TemplateSection, template_section_id) is None:
            return {"success": False, "error": "Section not found"}

        item = TemplateItem(
            template_section_id=template_section_id,
            title=title.strip(),
            description=description,
            link_url=link_url,
            file_url=file_url,
            due_in_days=due_in_days,
            order=_next_order(
                session,
                TemplateItem.order,
                TemplateItem.template_section_id == template_section_id,
            ),
        )
        session.add(item)
        session.commit()
        session.refresh(item)
        return {"success": True, "item": item}
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating item: {e}")
        return {"success": False, "error": "Failed to create item"}


def update_item(
    session: Session,
    principal: Principal | None,
    item_id: UUID,
    title: str,
    description: str | None = None,
    link_url: str | None = None,
    file_url: str | None = None,
    due_in_days: int | None = None,
) -> dict:
    """
    Edit a template item.

    A changed title gives the item a new identity: the next sync adds it
    as a new task and leaves the old copy on existing checklists.
    """
    try:
        require_admin(principal)
        item = session.get(TemplateItem, item_id)
        if item is None:
            return {"success": False, "error": "Item not found"}
        item.title = title.strip()
        item.description = description
        item.link_url = link_url
        item.file_url = file_url
        item.due_in_days = due_in_days
        session.add(item)
        session.commit()
        session.refresh(item)
        return {"success": True, "item": item}
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating item: {e}")
        return {"success": False, "error": "Failed to update item"}


def delete_item(session: Session, principal: Principal | None, item_id: UUID) -> dict:
    try:
        require_admin(principal)
        item = session.get(TemplateItem, item_id)
        if item is None:
            return {"success": False, "error": "Item not found"}
        session.delete(item)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting item: {e}")
        return {"success": False, "error": "Failed to delete item"}
