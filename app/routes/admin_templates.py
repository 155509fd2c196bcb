"""Admin routes for role templates and template sync."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException
from sqlmodel import Session

from app.core.auth import Principal, admin_principal
from app.core.database import get_session
from app.models import Role
from app.onboarding import templates
from app.onboarding.sync import sync_template_to_users
from app.routes.responses import template_out, unwrap

router = APIRouter(prefix="/admin/templates", tags=["admin"])


@router.get("")
async def list_templates(
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return [template_out(t) for t in templates.list_templates(session, principal)]


@router.post("", status_code=201)
async def create_template(
    role: Role = Form(...),
    title: str = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(templates.create_template(session, principal, role, title))
    return template_out(result["template"])


@router.get("/{role}")
async def get_template(
    role: Role,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    template = templates.get_template(session, principal, role)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template_out(template)


@router.post("/{role}/sync")
async def sync_template(
    role: Role,
    update_content: bool = Form(False),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """
    Push the role's template into every existing checklist of that role.

    New tasks are added as NOT_STARTED. With update_content, the
    description, links and order of existing tasks are refreshed too.
    Progress is never reset.
    """
    return unwrap(sync_template_to_users(session, principal, role, update_content))


# Sections

@router.post("/{template_id}/sections", status_code=201)
async def create_section(
    template_id: UUID,
    title: str = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    section = unwrap(templates.create_section(session, principal, template_id, title))["section"]
    return {"id": section.id, "title": section.title, "order": section.order}


@router.post("/sections/{section_id}")
async def update_section(
    section_id: UUID,
    title: str = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    section = unwrap(templates.update_section(session, principal, section_id, title))["section"]
    return {"id": section.id, "title": section.title, "order": section.order}


@router.delete("/sections/{section_id}")
async def delete_section(
    section_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return unwrap(templates.delete_section(session, principal, section_id))


# Items

def _item_out(item) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "link_url": item.link_url,
        "file_url": item.file_url,
        "due_in_days": item.due_in_days,
        "order": item.order,
    }


@router.post("/sections/{section_id}/items", status_code=201)
async def create_item(
    section_id: UUID,
    title: str = Form(...),
    description: str | None = Form(None),
    link_url: str | None = Form(None),
    file_url: str | None = Form(None),
    due_in_days: int | None = Form(None),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(
        templates.create_item(
            session, principal, section_id, title, description, link_url, file_url, due_in_days
        )
    )
    return _item_out(result["item"])


@router.post("/items/{item_id}")
async def update_item(
    item_id: UUID,
    title: str = Form(...),
    description: str | None = Form(None),
    link_url: str | None = Form(None),
    file_url: str | None = Form(None),
    due_in_days: int | None = Form(None),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(
        templates.update_item(
            session, principal, item_id, title, description, link_url, file_url, due_in_days
        )
    )
    return _item_out(result["item"])


@router.delete("/items/{item_id}")
async def delete_item(
    item_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return unwrap(templates.delete_item(session, principal, item_id))
