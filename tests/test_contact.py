"""Tests for the contact form and the staff directory."""

import json

import pytest
from sqlmodel import Session

from app.core import email as mailer
from app.core.config import settings
from app.models import AnalyticsEventType, Role, User, UserStatus
from app.onboarding.analytics import get_event_stats
from app.onboarding.contact import recipient_for, submit_contact_form
from app.onboarding.directory import list_directory
from tests.helpers import make_user

MESSAGE = "Hello, I have a question about my first week."


class TestRecipientRouting:
    """Tests for recipient_for."""

    @pytest.mark.parametrize(
        "subject,department,expected",
        [
            ("Question about payroll", None, "contact_hr_email"),
            ("HR paperwork", None, "contact_hr_email"),
            ("Password reset help", None, "contact_it_email"),
            ("Is IT open today?", None, "contact_it_email"),
            ("Training schedule", None, "contact_training_email"),
            ("Hello", "HR", "contact_hr_email"),
            ("Hello", "IT", "contact_it_email"),
            ("Hello", "Training", "contact_training_email"),
            ("General question", None, "contact_email"),
        ],
    )
    def test_routing(self, subject, department, expected):
        assert recipient_for(subject, department) == getattr(settings, expected)

    def test_short_keywords_need_whole_words(self):
        """Test "it" inside another word does not route to IT."""
        assert recipient_for("Where do I submit forms?") == settings.contact_email

    def test_hr_wins_over_it(self):
        assert recipient_for("Benefits system login") == settings.contact_hr_email


class TestSubmitContactForm:
    """Tests for submit_contact_form."""

    def test_sends_message_and_confirmation(self, session: Session, sent_emails: list):
        result = submit_contact_form(
            session, "Casey", "Jones", "casey@example.com", "Payroll question", MESSAGE
        )

        assert result["success"] is True
        assert [e["to"] for e in sent_emails] == [
            settings.contact_hr_email,
            "casey@example.com",
        ]
        assert MESSAGE in sent_emails[0]["html"]
        assert "casey@example.com" in sent_emails[0]["html"]
        assert "Payroll question" in sent_emails[1]["html"]

        [event] = get_event_stats(session, AnalyticsEventType.CONTACT_FORM_SUBMIT)
        assert json.loads(event.metadata_json) == {
            "subject": "Payroll question",
            "department": "general",
        }

    @pytest.mark.parametrize(
        "first,last,email,subject,message,error",
        [
            ("", "Jones", "c@example.com", "Hi", MESSAGE, "First name is required"),
            ("Casey", " ", "c@example.com", "Hi", MESSAGE, "Last name is required"),
            ("Casey", "Jones", "nope", "Hi", MESSAGE, "Invalid email address"),
            ("Casey", "Jones", "c@example.com", "", MESSAGE, "Subject is required"),
            ("Casey", "Jones", "c@example.com", "Hi", "Too short", "Message must be at least 10 characters"),
        ],
    )
    def test_validation(
        self, session: Session, sent_emails: list, first, last, email, subject, message, error
    ):
        result = submit_contact_form(session, first, last, email, subject, message)

        assert result == {"success": False, "error": error}
        assert sent_emails == []

    def test_failed_delivery(self, session: Session, monkeypatch):
        monkeypatch.setattr(mailer, "send_email", lambda to, subject, html: False)

        result = submit_contact_form(
            session, "Casey", "Jones", "casey@example.com", "Hello there", MESSAGE
        )

        assert result == {
            "success": False,
            "error": "Failed to send message. Please try again later.",
        }
        assert get_event_stats(session, AnalyticsEventType.CONTACT_FORM_SUBMIT) == []

    def test_failed_confirmation_still_succeeds(self, session: Session, monkeypatch):
        sent = []

        def send_to_team_only(to, subject, html):
            sent.append(to)
            return to != "casey@example.com"

        monkeypatch.setattr(mailer, "send_email", send_to_team_only)

        result = submit_contact_form(
            session, "Casey", "Jones", "casey@example.com", "Hello there", MESSAGE
        )

        assert result["success"] is True
        assert sent == [settings.contact_email, "casey@example.com"]


class TestDirectory:
    """Tests for list_directory."""

    def test_approved_users_by_role_then_name(self, session: Session, admin_user: User):
        make_user(session, "zoe@example.com", role=Role.RN, name="Zoe")
        make_user(session, "amy@example.com", role=Role.RN, name="amy")
        make_user(session, "cs@example.com", role=Role.CS, name="Carl")
        make_user(session, "wait@example.com", role=Role.CS, status=UserStatus.PENDING)
        make_user(session, "no@example.com", role=Role.CS, status=UserStatus.REJECTED)

        users = list_directory(session)

        assert [u.email for u in users] == [
            admin_user.email,
            "cs@example.com",
            "amy@example.com",
            "zoe@example.com",
        ]
