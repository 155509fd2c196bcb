"""Tests for public content, notifications and template administration."""

from uuid import uuid4

from sqlmodel import Session, select

from app.core.auth import Principal
from app.models import (
    Notification,
    NotificationType,
    Role,
    RoleTemplate,
    TemplateItem,
    TemplateSection,
    User,
    UserStatus,
)
from app.onboarding import content, notifications, templates
from tests.helpers import make_user


class TestDocs:
    """Tests for document administration."""

    def test_order_appended_per_category(self, session: Session, admin: Principal):
        first = content.create_doc(session, admin, "Handbook", "https://e.com/1", "Policies")
        other = content.create_doc(session, admin, "Benefits", "https://e.com/2", "HR")
        second = content.create_doc(session, admin, "Conduct", "https://e.com/3", "Policies")

        assert first["doc"].order == 0
        assert other["doc"].order == 0
        assert second["doc"].order == 1
        assert [d.title for d in content.list_docs(session)] == ["Benefits", "Handbook", "Conduct"]

    def test_new_doc_notifies_approved_users(
        self, session: Session, admin: Principal, nurse: User
    ):
        make_user(session, "pending@example.com", status=UserStatus.PENDING)

        content.create_doc(session, admin, "Handbook", "https://e.com/1", "Policies")

        recipients = {
            n.user_id
            for n in session.exec(
                select(Notification).where(Notification.type == NotificationType.NEW_DOCUMENT)
            ).all()
        }
        assert recipients == {admin.id, nurse.id}

    def test_update_and_delete(self, session: Session, admin: Principal):
        doc = content.create_doc(session, admin, "Handbook", "https://e.com/1", "Policies")["doc"]

        updated = content.update_doc(
            session, admin, doc.id, "Handbook v2", "https://e.com/v2", "Policies", "New edition"
        )
        assert updated["doc"].title == "Handbook v2"
        assert updated["doc"].description == "New edition"

        assert content.delete_doc(session, admin, doc.id) == {"success": True}
        assert content.list_docs(session) == []

    def test_staff_cannot_create(self, session: Session, nurse_principal: Principal):
        result = content.create_doc(session, nurse_principal, "X", "https://e.com", "HR")
        assert result == {"success": False, "error": "Failed to create document"}


class TestFaqs:
    """Tests for FAQ administration."""

    def test_order_appended_globally(self, session: Session, admin: Principal):
        content.create_faq(session, admin, "First?", "Yes.")
        content.create_faq(session, admin, "Second?", "Also yes.")

        assert [(f.question, f.order) for f in content.list_faqs(session)] == [
            ("First?", 0),
            ("Second?", 1),
        ]

    def test_delete_missing(self, session: Session, admin: Principal):
        assert content.delete_faq(session, admin, uuid4()) == {
            "success": False,
            "error": "FAQ not found",
        }


class TestNotifications:
    """Tests for in-app notifications."""

    def test_unread_count_and_mark_read(
        self, session: Session, nurse: User, nurse_principal: Principal
    ):
        notifications.create_bulk_notifications(
            session, [nurse.id, nurse.id], NotificationType.INFO, "Hello", "Welcome aboard"
        )
        session.commit()
        first, _ = notifications.get_notifications(session, nurse_principal)

        assert notifications.get_unread_count(session, nurse_principal) == 2
        notifications.mark_as_read(session, nurse_principal, first.id)
        assert notifications.get_unread_count(session, nurse_principal) == 1
        assert notifications.mark_all_as_read(session, nurse_principal) == {
            "success": True,
            "updated": 1,
        }
        assert notifications.get_unread_count(session, nurse_principal) == 0

    def test_owner_only(self, session: Session, nurse: User, admin: Principal):
        note = notifications.create_notification(
            session, nurse.id, NotificationType.INFO, "Private", "Only for Nina"
        )
        session.commit()

        assert notifications.delete_notification(session, admin, note.id) == {
            "success": False,
            "error": "Notification not found",
        }
        assert notifications.get_notifications(session, admin) == []

    def test_signed_out(self, session: Session):
        assert notifications.get_notifications(session, None) == []
        assert notifications.get_unread_count(session, None) == 0


class TestTemplateAdmin:
    """Tests for role template administration."""

    def test_create_template_once_per_role(self, session: Session, admin: Principal):
        assert templates.create_template(session, admin, Role.CS, "CS Onboarding")["success"]
        assert templates.create_template(session, admin, Role.CS, "Again") == {
            "success": False,
            "error": "Template already exists for this role",
        }

    def test_sections_and_items_appended_in_order(
        self, session: Session, admin: Principal, rn_template: RoleTemplate
    ):
        section = templates.create_section(session, admin, rn_template.id, "Wrap Up")["section"]
        first = templates.create_item(session, admin, section.id, "Exit Survey", due_in_days=0)
        second = templates.create_item(session, admin, section.id, "Sign Off")

        assert section.order == 2
        assert first["item"].order == 0
        assert first["item"].due_in_days == 0
        assert second["item"].order == 1

    def test_update_and_delete_item(
        self, session: Session, admin: Principal, rn_template: RoleTemplate
    ):
        item_id = rn_template.sections[0].items[0].id

        result = templates.update_item(
            session, admin, item_id, "Review Handbook", "Updated", "#h", None, 5
        )
        assert result["item"].title == "Review Handbook"
        assert result["item"].due_in_days == 5

        assert templates.delete_item(session, admin, item_id) == {"success": True}
        assert session.get(TemplateItem, item_id) is None

    def test_delete_section_cascades(
        self, session: Session, admin: Principal, rn_template: RoleTemplate
    ):
        section_id = rn_template.sections[0].id

        templates.delete_section(session, admin, section_id)

        assert session.get(TemplateSection, section_id) is None
        assert (
            session.exec(
                select(TemplateItem).where(TemplateItem.template_section_id == section_id)
            ).all()
            == []
        )

    def test_get_template(self, session: Session, admin: Principal, rn_template: RoleTemplate):
        assert templates.get_template(session, admin, Role.RN).id == rn_template.id
        assert templates.get_template(session, admin, Role.CS) is None
