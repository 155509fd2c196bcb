"""Personal checklist operations: cloning, progress and status updates."""
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from uuid import UUID

from sqlmodel import Session, select

from app.core.auth import Principal, require_auth
from app.core.clock import utcnow
from app.models import (
    AnalyticsEventType,
    ItemStatus,
    Role,
    RoleTemplate,
    TemplateItem,
    UserChecklist,
    UserItem,
    UserSection,
)
from app.onboarding.analytics import track_event
from app.onboarding.keys import derive_stable_key
from app.onboarding.stats import percent

logger = logging.getLogger(__name__)


@dataclass
class Progress:
    """Completion counts for a checklist."""
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    percentage: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def due_date_for(template_item: TemplateItem, now: datetime) -> datetime | None:
    """Absolute due date for a template item copied at `now`."""
    if template_item.due_in_days is None:
        return None
    return now + timedelta(days=template_item.due_in_days)


def new_user_item(
    section_title: str, template_item: TemplateItem, now: datetime
) -> UserItem:
    """Build a fresh NOT_STARTED user item from a template item."""
    return UserItem(
        title=template_item.title,
        description=template_item.description,
        link_url=template_item.link_url,
        file_url=template_item.file_url,
        due_date=due_date_for(template_item, now),
        status=ItemStatus.NOT_STARTED,
        stable_key=derive_stable_key(section_title, template_item.title),
        order=template_item.order,
        created_at=now,
        updated_at=now,
    )


def get_template(session: Session, role: Role) -> RoleTemplate | None:
    """Load the template for a role; sections and items come back ordered."""
    return session.exec(select(RoleTemplate).where(RoleTemplate.role == role)).first()


def clone_template_for_user(
    session: Session, user_id: UUID, role: Role, now: datetime | None = None
) -> UserChecklist | None:
    """
    Create a user's checklist by copying the template for their role.

    Returns None when no template exists for the role. Commits.
    """
    now = now or utcnow()
    template = get_template(session, role)
    if template is None:
        logger.warning(f"No template found for role: {role.value}")
        return None

    checklist = UserChecklist(user_id=user_id, created_at=now, updated_at=now)
    for template_section in template.sections:
        section = UserSection(title=template_section.title, order=template_section.order)
        section.items = [
            new_user_item(template_section.title, template_item, now)
            for template_item in template_section.items
        ]
        checklist.sections.append(section)

    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    logger.info(
        f"Cloned {role.value} template for user {user_id}: "
        f"{len(checklist.items)} items"
    )
    return checklist


def get_user_checklist(
    session: Session, user_id: UUID, role: Role
) -> UserChecklist | None:
    """Get a user's checklist, cloning it from the template if missing."""
    checklist = session.exec(
        select(UserChecklist).where(UserChecklist.user_id == user_id)
    ).first()
    if checklist is None:
        checklist = clone_template_for_user(session, user_id, role)
    return checklist


def calculate_progress(checklist: UserChecklist | None) -> Progress:
    """Count items by status and compute the rounded completion percentage."""
    if checklist is None:
        return Progress()

    items = checklist.items
    total = len(items)
    completed = sum(1 for i in items if i.status == ItemStatus.COMPLETE)
    in_progress = sum(1 for i in items if i.status == ItemStatus.IN_PROGRESS)
    not_started = sum(1 for i in items if i.status == ItemStatus.NOT_STARTED)
    percentage = percent(completed, total)

    return Progress(
        total=total,
        completed=completed,
        in_progress=in_progress,
        not_started=not_started,
        percentage=percentage,
    )


def update_item_status(
    session: Session,
    principal: Principal | None,
    item_id: UUID,
    status: ItemStatus,
    now: datetime | None = None,
) -> dict:
    """
    Change the status of one of the principal's own checklist items.

    completed_at is set or cleared together with the status, and the
    checklist's updated_at is touched as the user's last activity.
    """
    try:
        principal = require_auth(principal)
        now = now or utcnow()

        item = session.get(UserItem, item_id)
        if item is None:
            return {"success": False, "error": "Item not found"}

        checklist = item.section.checklist
        if checklist.user_id != principal.id:
            return {"success": False, "error": "Forbidden"}

        previous = item.status
        item.set_status(status, now)
        item.updated_at = now
        checklist.updated_at = now
        session.add(item)
        session.add(checklist)
        session.commit()
        session.refresh(checklist)
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating item status: {e}")
        return {"success": False, "error": "Failed to update item status"}

    progress = calculate_progress(checklist)
    if status != previous:
        if status == ItemStatus.COMPLETE:
            track_event(session, AnalyticsEventType.TASK_COMPLETE, principal.id, {"itemId": str(item_id)})
            if progress.percentage == 100:
                track_event(session, AnalyticsEventType.CHECKLIST_COMPLETE, principal.id)
        elif status == ItemStatus.IN_PROGRESS:
            track_event(session, AnalyticsEventType.TASK_START, principal.id, {"itemId": str(item_id)})

    return {"success": True, "status": status.value, "progress": progress.to_dict()}
