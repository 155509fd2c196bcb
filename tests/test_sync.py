"""Tests for syncing role templates into existing checklists."""

from datetime import datetime, timedelta

from sqlmodel import Session, select

from app.core.auth import Principal
from app.models import (
    ItemStatus,
    Notification,
    NotificationType,
    Role,
    RoleTemplate,
    TemplateItem,
    User,
    UserStatus,
)
from app.onboarding import sync
from app.onboarding.checklist import clone_template_for_user
from app.onboarding.sync import sync_template_to_users
from tests.helpers import make_user


def add_template_item(session: Session, template: RoleTemplate, section_index: int, **fields):
    section = template.sections[section_index]
    item = TemplateItem(template_section_id=section.id, **fields)
    session.add(item)
    session.commit()
    session.refresh(template)
    return item


class TestSyncTemplate:
    """Tests for sync_template_to_users."""

    def test_sync_without_changes_is_a_no_op(
        self, session: Session, admin: Principal, nurse: User
    ):
        result = sync_template_to_users(session, admin, Role.RN)

        assert result["success"] is True
        assert result["users_updated"] == 0
        assert result["items_added"] == 0
        assert result["items_updated"] == 0
        assert len(nurse.checklist.items) == 3

    def test_new_template_item_is_added(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        add_template_item(
            session, rn_template, 1, title="Telehealth Training", due_in_days=10, order=1
        )
        now = datetime(2024, 6, 1, 8, 0)

        result = sync_template_to_users(session, admin, Role.RN, now=now)

        assert result["items_added"] == 1
        assert result["users_updated"] == 1
        session.refresh(nurse.checklist)
        added = [i for i in nurse.checklist.items if i.title == "Telehealth Training"]
        assert len(added) == 1
        assert added[0].status == ItemStatus.NOT_STARTED
        assert added[0].due_date == now + timedelta(days=10)

        notifications = session.exec(
            select(Notification).where(Notification.user_id == nurse.id)
        ).all()
        assert [n.type for n in notifications] == [NotificationType.CHECKLIST_UPDATE]

    def test_sync_twice_adds_once(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        add_template_item(session, rn_template, 0, title="Badge Pickup", order=2)

        first = sync_template_to_users(session, admin, Role.RN)
        second = sync_template_to_users(session, admin, Role.RN)

        assert first["items_added"] == 1
        assert second["items_added"] == 0
        session.refresh(nurse.checklist)
        assert len(nurse.checklist.items) == 4

    def test_update_content_keeps_progress(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        item = nurse.checklist.items[0]
        completed_at = datetime(2024, 5, 3, 15, 0)
        item.set_status(ItemStatus.COMPLETE, completed_at)
        session.add(item)
        template_item = rn_template.sections[0].items[0]
        template_item.description = "Read the new handbook."
        template_item.link_url = "#handbook-v2"
        session.add(template_item)
        session.commit()

        result = sync_template_to_users(session, admin, Role.RN, update_content=True)

        assert result["items_updated"] == 3
        session.refresh(item)
        assert item.description == "Read the new handbook."
        assert item.link_url == "#handbook-v2"
        assert item.status == ItemStatus.COMPLETE
        assert item.completed_at == completed_at
        assert item.title == "Review Employee Handbook"

    def test_without_update_content_existing_items_untouched(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        template_item = rn_template.sections[0].items[0]
        template_item.description = "Changed."
        session.add(template_item)
        session.commit()

        sync_template_to_users(session, admin, Role.RN)

        session.refresh(nurse.checklist.items[0])
        assert nurse.checklist.items[0].description == "Read the handbook."

    def test_renamed_item_is_added_next_to_old_one(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        template_item = rn_template.sections[0].items[1]
        template_item.title = "Meet Your Whole Team"
        session.add(template_item)
        session.commit()

        result = sync_template_to_users(session, admin, Role.RN)

        assert result["items_added"] == 1
        session.refresh(nurse.checklist)
        titles = [i.title for i in nurse.checklist.items]
        assert "Meet Your Team" in titles
        assert "Meet Your Whole Team" in titles

    def test_renamed_section_adds_new_section(
        self, session: Session, admin: Principal, nurse: User, rn_template: RoleTemplate
    ):
        section = rn_template.sections[1]
        section.title = "Clinical Platforms"
        session.add(section)
        session.commit()

        result = sync_template_to_users(session, admin, Role.RN)

        assert result["items_added"] == 1
        session.refresh(nurse.checklist)
        assert sorted(s.title for s in nurse.checklist.sections) == [
            "Clinical Platforms",
            "Clinical Systems",
            "Company Basics",
        ]

    def test_failure_for_one_user_does_not_stop_others(
        self,
        session: Session,
        admin: Principal,
        nurse: User,
        rn_template: RoleTemplate,
        monkeypatch,
    ):
        other = make_user(session, "second@example.com")
        clone_template_for_user(session, other.id, Role.RN)
        add_template_item(session, rn_template, 0, title="Badge Pickup", order=2)
        failing_checklist_id = nurse.checklist.id
        real_sync_checklist = sync._sync_checklist

        def flaky_sync_checklist(db, checklist, *args):
            result = real_sync_checklist(db, checklist, *args)
            if checklist.id == failing_checklist_id:
                raise RuntimeError("database unavailable")
            return result

        monkeypatch.setattr(sync, "_sync_checklist", flaky_sync_checklist)

        result = sync_template_to_users(session, admin, Role.RN)

        assert result["success"] is True
        assert result["users_failed"] == 1
        assert result["users_updated"] == 1
        assert result["items_added"] == 1
        session.refresh(nurse)
        session.refresh(other)
        assert "Badge Pickup" not in [i.title for i in nurse.checklist.items]
        assert "Badge Pickup" in [i.title for i in other.checklist.items]
        notified = session.exec(
            select(Notification.user_id).where(
                Notification.type == NotificationType.CHECKLIST_UPDATE
            )
        ).all()
        assert notified == [other.id]

    def test_users_without_checklist_are_skipped(
        self, session: Session, admin: Principal, rn_template: RoleTemplate
    ):
        pending = make_user(session, "pending@example.com", status=UserStatus.PENDING)

        result = sync_template_to_users(session, admin, Role.RN)

        assert result["success"] is True
        assert result["users_updated"] == 0
        session.refresh(pending)
        assert pending.checklist is None

    def test_template_not_found(self, session: Session, admin: Principal):
        result = sync_template_to_users(session, admin, Role.PROVIDER)
        assert result == {"success": False, "error": "Template not found"}

    def test_requires_admin(self, session: Session, nurse_principal: Principal):
        result = sync_template_to_users(session, nurse_principal, Role.RN)
        assert result == {"success": False, "error": "Failed to sync template"}
