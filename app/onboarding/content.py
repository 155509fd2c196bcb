"""Public content: documents and FAQs."""
import logging
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from app.core.auth import Principal, require_admin
from app.models import FAQ, NotificationType, PublicDoc, User, UserStatus
from app.onboarding.notifications import create_bulk_notifications

logger = logging.getLogger(__name__)


def list_docs(session: Session) -> list[PublicDoc]:
    return list(
        session.exec(select(PublicDoc).order_by(PublicDoc.category, PublicDoc.order)).all()
    )


def list_faqs(session: Session) -> list[FAQ]:
    return list(session.exec(select(FAQ).order_by(FAQ.order)).all())


def _next_order(session: Session, column, *criteria) -> int:
    current = session.exec(select(func.max(column)).where(*criteria)).one()
    return 0 if current is None else current + 1


# Document actions

def create_doc(
    session: Session,
    principal: Principal | None,
    title: str,
    url: str,
    category: str,
    description: str | None = None,
) -> dict:
    """Add a document at the end of its category and tell approved staff about it."""
    try:
        require_admin(principal)
        doc = PublicDoc(
            title=title.strip(),
            description=description,
            url=url.strip(),
            category=category.strip(),
            order=_next_order(session, PublicDoc.order, PublicDoc.category == category.strip()),
        )
        session.add(doc)

        approved_ids = session.exec(
            select(User.id).where(User.status == UserStatus.APPROVED)
        ).all()
        create_bulk_notifications(
            session,
            list(approved_ids),
            NotificationType.NEW_DOCUMENT,
            title="New document available",
            message=f"{doc.title} was added to {doc.category}.",
            link="/docs",
        )
        session.commit()
        session.refresh(doc)
        return {"success": True, "doc": doc}
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating document: {e}")
        return {"success": False, "error": "Failed to create document"}


def update_doc(
    session: Session,
    principal: Principal | None,
    doc_id: UUID,
    title: str,
    url: str,
    category: str,
    description: str | None = None,
) -> dict:
    try:
        require_admin(principal)
        doc = session.get(PublicDoc, doc_id)
        if doc is None:
            return {"success": False, "error": "Document not found"}
        doc.title = title.strip()
        doc.description = description
        doc.url = url.strip()
        doc.category = category.strip()
        session.add(doc)
        session.commit()
        session.refresh(doc)
        return {"success": True, "doc": doc}
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating document: {e}")
        return {"success": False, "error": "Failed to update document"}


def delete_doc(session: Session, principal: Principal | None, doc_id: UUID) -> dict:
    try:
        require_admin(principal)
        doc = session.get(PublicDoc, doc_id)
        if doc is None:
            return {"success": False, "error": "Document not found"}
        session.delete(doc)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting document: {e}")
        return {"success": False, "error": "Failed to delete document"}


# FAQ actions

def create_faq(session: Session, principal: Principal | None, question: str, answer: str) -> dict:
    try:
        require_admin(principal)
        faq = FAQ(
            question=question.strip(),
            answer=answer.strip(),
            order=_next_order(session, FAQ.order),
        )
        session.add(faq)
        session.commit()
        session.refresh(faq)
        return {"success": True, "faq": faq}
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating FAQ: {e}")
        return {"success": False, "error": "Failed to create FAQ"}


def update_faq(
    session: Session, principal: Principal | None, faq_id: UUID, question: str, answer: str
) -> dict:
    try:
        require_admin(principal)
        faq = session.get(FAQ, faq_id)
        if faq is None:
            return {"success": False, "error": "FAQ not found"}
        faq.question = question.strip()
        faq.answer = answer.strip()
        session.add(faq)
        session.commit()
        session.refresh(faq)
        return {"success": True, "faq": faq}
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating FAQ: {e}")
        return {"success": False, "error": "Failed to update FAQ"}


def delete_faq(session: Session, principal: Principal | None, faq_id: UUID) -> dict:
    try:
        require_admin(principal)
        faq = session.get(FAQ, faq_id)
        if faq is None:
            return {"success": False, "error": "FAQ not found"}
        session.delete(faq)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting FAQ: {e}")
        return {"success": False, "error": "Failed to delete FAQ"}
