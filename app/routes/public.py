"""Public pages: documents, FAQs and the contact form, usable without signing in."""
from itertools import groupby

from fastapi import APIRouter, Depends, Form
from sqlmodel import Session

from app.core.database import get_session
from app.onboarding.contact import submit_contact_form
from app.onboarding.content import list_docs, list_faqs
from app.routes.responses import doc_out, faq_out, unwrap

router = APIRouter(tags=["public"])


@router.get("/docs")
async def docs(session: Session = Depends(get_session)):
    """Documents grouped by category."""
    return [
        {"category": category, "docs": [doc_out(d) for d in group]}
        for category, group in groupby(list_docs(session), key=lambda d: d.category)
    ]


@router.get("/faqs")
async def faqs(session: Session = Depends(get_session)):
    return [faq_out(f) for f in list_faqs(session)]


@router.post("/contact")
async def contact(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    subject: str = Form(...),
    message: str = Form(...),
    department: str | None = Form(None),
    session: Session = Depends(get_session),
):
    return unwrap(
        submit_contact_form(
            session, first_name, last_name, email, subject, message, department
        )
    )
