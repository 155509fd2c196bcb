"""Notification routes for the signed-in user."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Principal, get_current_principal
from app.core.database import get_session
from app.onboarding import notifications
from app.routes.responses import unwrap

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return [
        {
            "id": n.id,
            "type": n.type.value,
            "title": n.title,
            "message": n.message,
            "link": n.link,
            "read": n.read,
            "created_at": n.created_at,
        }
        for n in notifications.get_notifications(session, principal)
    ]


@router.get("/unread-count")
async def unread_count(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return {"count": notifications.get_unread_count(session, principal)}


@router.post("/read-all")
async def read_all(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return unwrap(notifications.mark_all_as_read(session, principal))


@router.post("/{notification_id}/read")
async def read_one(
    notification_id: UUID,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return unwrap(notifications.mark_as_read(session, principal, notification_id))


@router.delete("/{notification_id}")
async def delete_one(
    notification_id: UUID,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return unwrap(notifications.delete_notification(session, principal, notification_id))
