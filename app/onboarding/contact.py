"""Public contact form.

Messages are routed to the HR, IT or training inbox when the subject or
department mentions them, otherwise to the general inbox. The sender gets
a confirmation email; if that one fails the submission still succeeds.
"""
import logging
import re

from sqlmodel import Session

from app.core import email as mailer
from app.core.config import settings
from app.models import AnalyticsEventType
from app.onboarding.accounts import EMAIL_PATTERN
from app.onboarding.analytics import track_event

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_SUBJECT_LENGTH = 200
MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 5000

# Short keywords must appear as whole words ("it" would match "submit")
HR_WORDS = {"hr"}
HR_PHRASES = ("human resources", "benefits", "payroll")
IT_WORDS = {"it"}
IT_PHRASES = ("technical", "password", "login", "system")
TRAINING_PHRASES = ("training", "onboarding", "learning")


def _words(text: str) -> set[str]:
    return set(re.findall(r"[a-z]+", text))


def recipient_for(subject: str, department: str | None = None) -> str:
    """Pick the inbox for a message. HR wins over IT, IT over training."""
    subject = subject.lower()
    department = (department or "").lower()
    subject_words = _words(subject)
    department_words = _words(department)

    if (
        subject_words & HR_WORDS
        or any(p in subject for p in HR_PHRASES)
        or department_words & HR_WORDS
    ):
        return settings.contact_hr_email
    if (
        subject_words & IT_WORDS
        or any(p in subject for p in IT_PHRASES)
        or department_words & IT_WORDS
    ):
        return settings.contact_it_email
    if any(p in subject for p in TRAINING_PHRASES) or "training" in department:
        return settings.contact_training_email
    return settings.contact_email


def _validate(
    first_name: str, last_name: str, email: str, subject: str, message: str
) -> str | None:
    if not first_name:
        return "First name is required"
    if len(first_name) > MAX_NAME_LENGTH:
        return "First name is too long"
    if not last_name:
        return "Last name is required"
    if len(last_name) > MAX_NAME_LENGTH:
        return "Last name is too long"
    if not EMAIL_PATTERN.match(email):
        return "Invalid email address"
    if not subject:
        return "Subject is required"
    if len(subject) > MAX_SUBJECT_LENGTH:
        return "Subject is too long"
    if len(message) < MIN_MESSAGE_LENGTH:
        return f"Message must be at least {MIN_MESSAGE_LENGTH} characters"
    if len(message) > MAX_MESSAGE_LENGTH:
        return "Message is too long"
    return None


def submit_contact_form(
    session: Session,
    first_name: str,
    last_name: str,
    email: str,
    subject: str,
    message: str,
    department: str | None = None,
) -> dict:
    first_name = first_name.strip()
    last_name = last_name.strip()
    email = email.strip()
    subject = subject.strip()
    message = message.strip()
    department = (department or "").strip() or None

    error = _validate(first_name, last_name, email, subject, message)
    if error:
        return {"success": False, "error": error}

    try:
        recipient = recipient_for(subject, department)
        sent = mailer.send_contact_email(
            recipient, subject, message, f"{first_name} {last_name}", email
        )
        if not sent:
            return {"success": False, "error": "Failed to send message. Please try again later."}

        if not mailer.send_contact_confirmation_email(email, first_name, subject):
            logger.warning(f"Contact confirmation to {email} was not sent")
    except Exception as e:
        logger.error(f"Contact form error: {e}")
        return {"success": False, "error": "An unexpected error occurred. Please try again later."}

    track_event(
        session,
        AnalyticsEventType.CONTACT_FORM_SUBMIT,
        metadata={"subject": subject, "department": department or "general"},
    )
    logger.info(f"Contact form message routed to {recipient}")
    return {
        "success": True,
        "message": "Thank you for your message! We'll get back to you soon.",
    }
