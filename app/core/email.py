"""Outgoing email.

Messages are rendered from Jinja templates in ``app/templates/email`` and
delivered over SMTP. When no ``MAIL_SERVER`` is configured the message is
logged instead of sent, which is the normal mode for development and tests.

Every function here is best effort: failures are logged and reported as a
False return value, never raised, so a broken mail server cannot undo the
database change that triggered the email.
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from app.core.config import settings
from app.models import ROLE_NAMES, Role

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render(template_name: str, **context) -> str:
    """Render an email body template."""
    context.setdefault("app_name", settings.app_name)
    context.setdefault("base_url", settings.public_base_url.rstrip("/"))
    return _env.get_template(template_name).render(**context)


def send_email(to: str, subject: str, html: str) -> bool:
    """Send an HTML email. Returns True if it was delivered (or logged)."""
    if not settings.mail_server:
        logger.info(f"Email (log-only) to={to} subject={subject!r}")
        return True

    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = settings.mail_default_sender
    message["To"] = to
    message.attach(MIMEText(html, "html", "utf-8"))

    try:
        with smtplib.SMTP(settings.mail_server, settings.mail_port, timeout=10) as smtp:
            if settings.mail_use_tls:
                smtp.starttls()
            if settings.mail_username:
                smtp.login(settings.mail_username, settings.mail_password)
            smtp.sendmail(settings.mail_default_sender, [to], message.as_string())
        logger.info(f"Email sent to={to} subject={subject!r}")
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to}: {e}")
        return False


def _role_name(role: Role | str) -> str:
    try:
        return ROLE_NAMES[Role(role)]
    except ValueError:
        return str(role)


def _send_template(to: str, subject: str, template_name: str, /, **context) -> bool:
    try:
        html = render(template_name, **context)
    except TemplateError as e:
        logger.error(f"Failed to render email {template_name}: {e}")
        return False
    return send_email(to, subject, html)


def send_welcome_email(to: str, name: str, role: Role | str) -> bool:
    return _send_template(
        to, f"Welcome to {settings.app_name}!", "welcome.html",
        name=name, role_name=_role_name(role),
    )


def send_approval_email(to: str, name: str, role: Role | str) -> bool:
    return _send_template(
        to, "Your account has been approved", "approved.html",
        name=name, role_name=_role_name(role),
    )


def send_password_reset_email(to: str, name: str, token: str) -> bool:
    return _send_template(
        to, "Reset your password", "password_reset.html",
        name=name, token=token, expire_minutes=settings.password_reset_expire_minutes,
    )


def send_verification_email(to: str, name: str, token: str) -> bool:
    return _send_template(
        to, "Verify your email address", "verify_email.html",
        name=name, token=token, expire_hours=settings.email_verification_expire_hours,
    )


def send_contact_email(
    to: str, subject: str, message: str, from_name: str, from_email: str
) -> bool:
    return _send_template(
        to, f"Contact form: {subject}", "contact.html",
        name="team", subject=subject, message=message,
        from_name=from_name, from_email=from_email,
    )


def send_contact_confirmation_email(to: str, name: str, subject: str) -> bool:
    return _send_template(
        to, "We received your message", "contact_confirmation.html",
        name=name, subject=subject,
    )
