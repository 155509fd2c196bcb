"""Admin routes for public documents and FAQs."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form
from sqlmodel import Session

from app.core.auth import Principal, admin_principal
from app.core.database import get_session
from app.onboarding import content
from app.routes.responses import doc_out, faq_out, unwrap

router = APIRouter(prefix="/admin/content", tags=["admin"])


@router.post("/docs", status_code=201)
async def create_doc(
    title: str = Form(...),
    url: str = Form(...),
    category: str = Form(...),
    description: str | None = Form(None),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """Add a document. Approved users get a notification about it."""
    result = unwrap(content.create_doc(session, principal, title, url, category, description))
    return doc_out(result["doc"])


@router.post("/docs/{doc_id}")
async def update_doc(
    doc_id: UUID,
    title: str = Form(...),
    url: str = Form(...),
    category: str = Form(...),
    description: str | None = Form(None),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(
        content.update_doc(session, principal, doc_id, title, url, category, description)
    )
    return doc_out(result["doc"])


@router.delete("/docs/{doc_id}")
async def delete_doc(
    doc_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return unwrap(content.delete_doc(session, principal, doc_id))


@router.post("/faqs", status_code=201)
async def create_faq(
    question: str = Form(...),
    answer: str = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(content.create_faq(session, principal, question, answer))
    return faq_out(result["faq"])


@router.post("/faqs/{faq_id}")
async def update_faq(
    faq_id: UUID,
    question: str = Form(...),
    answer: str = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(content.update_faq(session, principal, faq_id, question, answer))
    return faq_out(result["faq"])


@router.delete("/faqs/{faq_id}")
async def delete_faq(
    faq_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return unwrap(content.delete_faq(session, principal, faq_id))
