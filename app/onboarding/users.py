"""Admin user management: create, edit, approve and remove accounts."""
import logging
import secrets
import string
from uuid import UUID

from sqlmodel import Session, select

from app.core.auth import Principal, require_admin
from app.core.email import send_approval_email
from app.core.security import hash_password
from app.models import AnalyticsEventType, NotificationType, Role, User, UserStatus
from app.onboarding.analytics import track_event
from app.onboarding.checklist import clone_template_for_user
from app.onboarding.notifications import create_notification

logger = logging.getLogger(__name__)


def list_users(
    session: Session, principal: Principal | None, status: UserStatus | None = None
) -> list[User]:
    """All users, newest first, optionally filtered by status."""
    require_admin(principal)
    statement = select(User).order_by(User.created_at.desc())
    if status is not None:
        statement = statement.where(User.status == status)
    return list(session.exec(statement).all())


def _email_taken(session: Session, email: str, exclude_id: UUID | None = None) -> bool:
    statement = select(User).where(User.email == email)
    if exclude_id is not None:
        statement = statement.where(User.id != exclude_id)
    return session.exec(statement).first() is not None


def create_user(
    session: Session,
    principal: Principal | None,
    name: str,
    email: str,
    password: str,
    role: Role,
) -> dict:
    """Create an approved account and clone its checklist right away."""
    try:
        admin = require_admin(principal)
        email = email.strip().lower()
        if _email_taken(session, email):
            return {"success": False, "error": "User with this email already exists"}

        user = User(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            role=role,
            status=UserStatus.APPROVED,
        )
        session.add(user)
        # The account and its checklist are committed together
        if role != Role.ADMIN:
            clone_template_for_user(session, user.id, role)
        session.commit()
        session.refresh(user)
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating user: {e}")
        return {"success": False, "error": "Failed to create user"}

    track_event(session, AnalyticsEventType.USER_CREATED, admin.id, {"userId": str(user.id)})
    return {"success": True, "user": user}


def update_user(
    session: Session,
    principal: Principal | None,
    user_id: UUID,
    name: str,
    email: str,
    role: Role,
) -> dict:
    """
    Edit name, email and role.

    Changing the role does not touch an existing checklist; it was cloned
    from the old role's template and stays that way.
    """
    try:
        require_admin(principal)
        email = email.strip().lower()
        user = session.get(User, user_id)
        if user is None:
            return {"success": False, "error": "User not found"}
        if _email_taken(session, email, exclude_id=user_id):
            return {"success": False, "error": "Email is already in use"}

        user.name = name.strip()
        user.email = email
        user.role = role
        session.add(user)
        session.commit()
        session.refresh(user)
        return {"success": True, "user": user}
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating user: {e}")
        return {"success": False, "error": "Failed to update user"}


def delete_user(session: Session, principal: Principal | None, user_id: UUID) -> dict:
    """Delete a user together with their checklist, tokens and notifications."""
    try:
        admin = require_admin(principal)
        if admin.id == user_id:
            return {"success": False, "error": "You cannot delete your own account"}
        user = session.get(User, user_id)
        if user is None:
            return {"success": False, "error": "User not found"}
        session.delete(user)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting user: {e}")
        return {"success": False, "error": "Failed to delete user"}


def approve_user(session: Session, principal: Principal | None, user_id: UUID) -> dict:
    """
    Approve a pending account.

    The checklist is cloned from the role template if the user has none,
    the user is notified in-app, and an approval email is sent on a best
    effort basis.
    """
    try:
        require_admin(principal)
        user = session.get(User, user_id)
        if user is None:
            return {"success": False, "error": "User not found"}

        user.status = UserStatus.APPROVED
        create_notification(
            session,
            user.id,
            NotificationType.ACCOUNT_APPROVED,
            title="Account approved",
            message="Your account has been approved. Your onboarding checklist is ready.",
            link="/app/checklist",
        )
        session.add(user)
        # The approval and the cloned checklist are committed together
        if user.checklist is None and user.role != Role.ADMIN:
            clone_template_for_user(session, user.id, user.role)
        session.commit()
        session.refresh(user)
    except Exception as e:
        session.rollback()
        logger.error(f"Error approving user: {e}")
        return {"success": False, "error": "Failed to approve user"}

    send_approval_email(user.email, user.name or "there", user.role)
    return {"success": True, "user": user}


def reject_user(session: Session, principal: Principal | None, user_id: UUID) -> dict:
    try:
        require_admin(principal)
        user = session.get(User, user_id)
        if user is None:
            return {"success": False, "error": "User not found"}
        user.status = UserStatus.REJECTED
        session.add(user)
        session.commit()
        session.refresh(user)
        return {"success": True, "user": user}
    except Exception as e:
        session.rollback()
        logger.error(f"Error rejecting user: {e}")
        return {"success": False, "error": "Failed to reject user"}


def _temporary_password() -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "Temp" + "".join(secrets.choice(alphabet) for _ in range(6)) + "!"


def reset_user_password(session: Session, principal: Principal | None, user_id: UUID) -> dict:
    """Replace a user's password with a generated temporary one and return it."""
    try:
        require_admin(principal)
        user = session.get(User, user_id)
        if user is None:
            return {"success": False, "error": "User not found"}
        temp_password = _temporary_password()
        user.password_hash = hash_password(temp_password)
        session.add(user)
        session.commit()
        return {"success": True, "temp_password": temp_password}
    except Exception as e:
        session.rollback()
        logger.error(f"Error resetting password: {e}")
        return {"success": False, "error": "Failed to reset password"}
