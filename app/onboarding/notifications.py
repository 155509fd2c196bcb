"""In-app notifications."""
import logging
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from app.core.auth import Principal, require_auth
from app.models import Notification, NotificationType

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 50


def get_notifications(session: Session, principal: Principal | None) -> list[Notification]:
    """The principal's most recent notifications, newest first."""
    if principal is None:
        return []
    return list(
        session.exec(
            select(Notification)
            .where(Notification.user_id == principal.id)
            .order_by(Notification.created_at.desc())
            .limit(MAX_NOTIFICATIONS)
        ).all()
    )


def get_unread_count(session: Session, principal: Principal | None) -> int:
    if principal is None:
        return 0
    return session.exec(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == principal.id)
        .where(Notification.read == False)  # noqa: E712
    ).one()


def mark_as_read(session: Session, principal: Principal | None, notification_id: UUID) -> dict:
    try:
        principal = require_auth(principal)
        notification = session.get(Notification, notification_id)
        if notification is None or notification.user_id != principal.id:
            return {"success": False, "error": "Notification not found"}
        notification.read = True
        session.add(notification)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error marking notification as read: {e}")
        return {"success": False, "error": "Failed to mark notification as read"}


def mark_all_as_read(session: Session, principal: Principal | None) -> dict:
    try:
        principal = require_auth(principal)
        unread = session.exec(
            select(Notification)
            .where(Notification.user_id == principal.id)
            .where(Notification.read == False)  # noqa: E712
        ).all()
        for notification in unread:
            notification.read = True
            session.add(notification)
        session.commit()
        return {"success": True, "updated": len(unread)}
    except Exception as e:
        session.rollback()
        logger.error(f"Error marking all notifications as read: {e}")
        return {"success": False, "error": "Failed to mark notifications as read"}


def delete_notification(
    session: Session, principal: Principal | None, notification_id: UUID
) -> dict:
    try:
        principal = require_auth(principal)
        notification = session.get(Notification, notification_id)
        if notification is None or notification.user_id != principal.id:
            return {"success": False, "error": "Notification not found"}
        session.delete(notification)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting notification: {e}")
        return {"success": False, "error": "Failed to delete notification"}


def create_notification(
    session: Session,
    user_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    """Add a notification to the session. The caller commits."""
    notification = Notification(
        user_id=user_id, type=type, title=title, message=message, link=link
    )
    session.add(notification)
    return notification


def create_bulk_notifications(
    session: Session,
    user_ids: list[UUID],
    type: NotificationType,
    title: str,
    message: str,
    link: str | None = None,
) -> int:
    """Add the same notification for several users. The caller commits."""
    for user_id in user_ids:
        create_notification(session, user_id, type, title, message, link)
    return len(user_ids)
