"""Helpers shared by the route modules: action results and JSON shapes."""
from fastapi import HTTPException

from app.models import (
    FAQ,
    PublicDoc,
    RoleTemplate,
    User,
    UserChecklist,
)


def unwrap(result: dict) -> dict:
    """
    Turn an action's failure result into an HTTP error.

    "... not found" errors map to 404, "Forbidden" to 403 and every other
    failure to 400.
    """
    if result.get("success"):
        return result
    error = result.get("error") or "Request failed"
    if "not found" in error.lower():
        status_code = 404
    elif error == "Forbidden":
        status_code = 403
    else:
        status_code = 400
    raise HTTPException(status_code=status_code, detail=error)


def user_out(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "status": user.status.value,
        "email_verified": user.email_verified,
        "created_at": user.created_at,
    }


def checklist_out(checklist: UserChecklist | None) -> dict | None:
    if checklist is None:
        return None
    return {
        "id": checklist.id,
        "created_at": checklist.created_at,
        "updated_at": checklist.updated_at,
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "order": section.order,
                "items": [
                    {
                        "id": item.id,
                        "title": item.title,
                        "description": item.description,
                        "link_url": item.link_url,
                        "file_url": item.file_url,
                        "status": item.status.value,
                        "due_date": item.due_date,
                        "completed_at": item.completed_at,
                        "order": item.order,
                    }
                    for item in section.items
                ],
            }
            for section in checklist.sections
        ],
    }


def template_out(template: RoleTemplate) -> dict:
    return {
        "id": template.id,
        "role": template.role.value,
        "title": template.title,
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "order": section.order,
                "items": [
                    {
                        "id": item.id,
                        "title": item.title,
                        "description": item.description,
                        "link_url": item.link_url,
                        "file_url": item.file_url,
                        "due_in_days": item.due_in_days,
                        "order": item.order,
                    }
                    for item in section.items
                ],
            }
            for section in template.sections
        ],
    }


def doc_out(doc: PublicDoc) -> dict:
    return {
        "id": doc.id,
        "title": doc.title,
        "description": doc.description,
        "url": doc.url,
        "category": doc.category,
        "order": doc.order,
    }


def faq_out(faq: FAQ) -> dict:
    return {"id": faq.id, "question": faq.question, "answer": faq.answer, "order": faq.order}
