"""Template synchronization: push role template changes into user checklists."""
import logging
from datetime import datetime

from sqlmodel import Session, select

from app.core.auth import Principal, require_admin
from app.core.clock import utcnow
from app.models import (
    AnalyticsEventType,
    NotificationType,
    Role,
    TemplateSection,
    User,
    UserChecklist,
    UserItem,
    UserSection,
)
from app.onboarding.analytics import track_event
from app.onboarding.checklist import get_template, new_user_item
from app.onboarding.keys import derive_stable_key
from app.onboarding.notifications import create_notification

logger = logging.getLogger(__name__)


def sync_template_to_users(
    session: Session,
    principal: Principal | None,
    role: Role,
    update_content: bool = False,
    now: datetime | None = None,
) -> dict:
    """
    Sync a role's template into every existing checklist of that role.

    Template items are matched to user items by stable key. Missing items
    are added as NOT_STARTED. With update_content, matched items get the
    template's description, links and order; their title, status,
    completed_at and stable key are never touched. Sections are matched by
    title, so a renamed template section is added as a new section.

    Each user is committed on their own. A failure for one user is logged
    and rolled back without stopping the others; re-running is safe.

    Returns dict with success flag and sync statistics.
    """
    try:
        principal = require_admin(principal)
        now = now or utcnow()

        template = get_template(session, role)
        if template is None:
            return {"success": False, "error": "Template not found"}

        users = session.exec(select(User).where(User.role == role)).all()
    except Exception as e:
        logger.error(f"Error syncing template: {e}")
        return {"success": False, "error": "Failed to sync template"}

    stats = {"users_updated": 0, "items_added": 0, "items_updated": 0, "users_failed": 0}
    template_sections = list(template.sections)

    for user in users:
        checklist = user.checklist
        if checklist is None:
            continue  # Nothing to sync into until the user is approved

        user_id = user.id
        try:
            added, updated = _sync_checklist(
                session, checklist, template_sections, update_content, now
            )
            if added:
                create_notification(
                    session,
                    user_id,
                    NotificationType.CHECKLIST_UPDATE,
                    title="Your checklist was updated",
                    message=f"{added} new task(s) were added to your onboarding checklist.",
                    link="/app/checklist",
                )
            session.commit()
        except Exception as e:
            session.rollback()
            stats["users_failed"] += 1
            logger.error(f"Template sync failed for user {user_id}: {e}")
            continue

        stats["items_added"] += added
        stats["items_updated"] += updated
        if added or updated:
            stats["users_updated"] += 1

    logger.info(f"Template sync for {role.value} completed: {stats}")
    track_event(
        session,
        AnalyticsEventType.TEMPLATE_SYNCED,
        principal.id,
        {"role": role.value, "updateContent": update_content, **stats},
    )
    return {"success": True, **stats}


def _sync_checklist(
    session: Session,
    checklist: UserChecklist,
    template_sections: list[TemplateSection],
    update_content: bool,
    now: datetime,
) -> tuple[int, int]:
    """Reconcile one checklist against the template. Returns (added, updated)."""
    existing_items: dict[str, UserItem] = {}
    sections_by_title: dict[str, UserSection] = {}
    for section in checklist.sections:
        sections_by_title[section.title] = section
        for item in section.items:
            existing_items[item.stable_key] = item

    added = 0
    updated = 0

    for template_section in template_sections:
        user_section = sections_by_title.get(template_section.title)
        if user_section is None:
            user_section = UserSection(
                title=template_section.title, order=template_section.order
            )
            checklist.sections.append(user_section)
            sections_by_title[template_section.title] = user_section

        for template_item in template_section.items:
            stable_key = derive_stable_key(template_section.title, template_item.title)
            existing = existing_items.get(stable_key)

            if existing is None:
                item = new_user_item(template_section.title, template_item, now)
                user_section.items.append(item)
                existing_items[stable_key] = item
                added += 1
            elif update_content:
                existing.description = template_item.description
                existing.link_url = template_item.link_url
                existing.file_url = template_item.file_url
                existing.order = template_item.order
                session.add(existing)
                updated += 1

    session.add(checklist)
    return added, updated
