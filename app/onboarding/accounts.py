"""Self-service account actions: sign-in, sign-up, password reset, email
verification and profile settings.

Password reset and email verification each change the user and mark the
token used in a single commit, so a token can never be spent without the
change it authorizes (or the other way round).
"""
import logging
import re
from datetime import datetime, timedelta

from sqlmodel import Session, select

from app.core import email as mailer
from app.core.auth import Principal, require_auth
from app.core.clock import utcnow
from app.core.config import settings
from app.core.security import generate_token, hash_password, verify_password
from app.models import (
    AnalyticsEventType,
    EmailVerificationToken,
    PasswordResetToken,
    Role,
    User,
)
from app.onboarding.analytics import track_event

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 8


def _find_user_by_email(session: Session, email: str) -> User | None:
    return session.exec(select(User).where(User.email == email.strip().lower())).first()


def authenticate(session: Session, email: str, password: str) -> User | None:
    """Return the user for valid credentials, otherwise None."""
    user = _find_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    track_event(session, AnalyticsEventType.LOGIN, user.id)
    return user


def _validate_sign_up(name: str, email: str, password: str, role: Role) -> str | None:
    if len(name.strip()) < MIN_NAME_LENGTH:
        return "Name must be at least 2 characters"
    if not EMAIL_PATTERN.match(email.strip()):
        return "Invalid email address"
    if len(password) < MIN_PASSWORD_LENGTH:
        return "Password must be at least 8 characters"
    if role == Role.ADMIN:
        return "Invalid role"
    return None


def sign_up(session: Session, name: str, email: str, password: str, role: Role) -> dict:
    """
    Register a new account.

    The account starts PENDING and gets no checklist until an administrator
    approves it.
    """
    error = _validate_sign_up(name, email, password, role)
    if error:
        return {"success": False, "error": error}

    try:
        if _find_user_by_email(session, email) is not None:
            return {"success": False, "error": "An account with this email already exists"}

        user = User(
            name=name.strip(),
            email=email.strip().lower(),
            password_hash=hash_password(password),
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
    except Exception as e:
        session.rollback()
        logger.error(f"Sign up error: {e}")
        return {"success": False, "error": "Failed to create account. Please try again."}

    mailer.send_welcome_email(user.email, user.name, user.role)
    return {"success": True, "user_id": user.id}


# Password reset

def request_password_reset(session: Session, email: str) -> dict:
    """
    Email a reset link if the address belongs to an account.

    Succeeds whether or not the account exists so the response does not
    reveal which addresses are registered.
    """
    try:
        user = _find_user_by_email(session, email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return {"success": True}

        for old in session.exec(
            select(PasswordResetToken).where(PasswordResetToken.user_id == user.id)
        ).all():
            session.delete(old)

        reset = PasswordResetToken(
            token=generate_token(),
            user_id=user.id,
            expires=utcnow() + timedelta(minutes=settings.password_reset_expire_minutes),
        )
        session.add(reset)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Password reset request error: {e}")
        return {"success": False, "error": "Failed to process request"}

    mailer.send_password_reset_email(user.email, user.name or "User", reset.token)
    return {"success": True}


def _usable_reset_token(
    session: Session, token: str, now: datetime
) -> tuple[PasswordResetToken | None, str | None]:
    reset = session.exec(
        select(PasswordResetToken).where(PasswordResetToken.token == token)
    ).first()
    if reset is None:
        return None, "Invalid reset token"
    if reset.used:
        return None, "This reset link has already been used"
    if reset.is_expired(now):
        return None, "This reset link has expired"
    return reset, None


def validate_reset_token(session: Session, token: str, now: datetime | None = None) -> bool:
    """True if the token exists, is unused and has not expired."""
    reset, _ = _usable_reset_token(session, token, now or utcnow())
    return reset is not None


def reset_password(
    session: Session, token: str, new_password: str, now: datetime | None = None
) -> dict:
    try:
        reset, error = _usable_reset_token(session, token, now or utcnow())
        if error:
            return {"success": False, "error": error}
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return {"success": False, "error": "Password must be at least 8 characters"}

        user = session.get(User, reset.user_id)
        user.password_hash = hash_password(new_password)
        reset.used = True
        session.add(user)
        session.add(reset)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Password reset error: {e}")
        return {"success": False, "error": "Failed to reset password"}


# Email verification

def send_verification_email(session: Session, principal: Principal | None) -> dict:
    """Issue a fresh verification token for the signed-in user and email it."""
    try:
        principal = require_auth(principal)
        user = session.get(User, principal.id)
        if user is None:
            return {"success": False, "error": "User not found"}
        if user.email_verified:
            return {"success": False, "error": "Email is already verified"}

        for old in session.exec(
            select(EmailVerificationToken).where(EmailVerificationToken.user_id == user.id)
        ).all():
            session.delete(old)

        verification = EmailVerificationToken(
            token=generate_token(),
            user_id=user.id,
            expires=utcnow() + timedelta(hours=settings.email_verification_expire_hours),
        )
        session.add(verification)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Resend verification error: {e}")
        return {"success": False, "error": "Failed to send verification email"}

    mailer.send_verification_email(user.email, user.name or "User", verification.token)
    return {"success": True}


def verify_email(session: Session, token: str, now: datetime | None = None) -> dict:
    now = now or utcnow()
    try:
        verification = session.exec(
            select(EmailVerificationToken).where(EmailVerificationToken.token == token)
        ).first()
        if verification is None:
            return {"success": False, "error": "Invalid verification token"}
        if verification.used:
            return {"success": False, "error": "This link has already been used"}
        if verification.is_expired(now):
            return {"success": False, "error": "This link has expired"}

        user = session.get(User, verification.user_id)
        user.email_verified = now
        verification.used = True
        session.add(user)
        session.add(verification)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Email verification error: {e}")
        return {"success": False, "error": "Verification failed"}


# Settings

def update_profile(session: Session, principal: Principal | None, name: str) -> dict:
    try:
        principal = require_auth(principal)
        if len(name.strip()) < MIN_NAME_LENGTH:
            return {"success": False, "error": "Name must be at least 2 characters"}
        user = session.get(User, principal.id)
        if user is None:
            return {"success": False, "error": "User not found"}
        user.name = name.strip()
        session.add(user)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Update profile error: {e}")
        return {"success": False, "error": "Failed to update profile"}


def update_password(
    session: Session, principal: Principal | None, current_password: str, new_password: str
) -> dict:
    try:
        principal = require_auth(principal)
        user = session.get(User, principal.id)
        if user is None or not user.password_hash:
            return {"success": False, "error": "User not found"}
        if not verify_password(current_password, user.password_hash):
            return {"success": False, "error": "Current password is incorrect"}
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return {"success": False, "error": "Password must be at least 8 characters"}

        user.password_hash = hash_password(new_password)
        session.add(user)
        session.commit()
        return {"success": True}
    except Exception as e:
        session.rollback()
        logger.error(f"Update password error: {e}")
        return {"success": False, "error": "Failed to update password"}
