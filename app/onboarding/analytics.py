"""Analytics: event tracking and onboarding statistics.

Statistics are computed in memory over the checklists of approved users.
"""
import json
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from app.core.clock import days_between_ceil, utcnow
from app.models import (
    AnalyticsEvent,
    AnalyticsEventType,
    ItemStatus,
    User,
    UserChecklist,
    UserStatus,
)
from app.onboarding.stats import mean, mean_of, percent

logger = logging.getLogger(__name__)

MIN_ASSIGNMENTS_FOR_BOTTLENECK = 3
MAX_BOTTLENECKS = 10


def track_event(
    session: Session,
    event_type: AnalyticsEventType,
    user_id: UUID | None = None,
    metadata: dict | None = None,
) -> None:
    """Record an analytics event. Failures are logged and otherwise ignored."""
    try:
        session.add(
            AnalyticsEvent(
                type=event_type,
                user_id=user_id,
                metadata_json=json.dumps(metadata, default=str) if metadata else None,
            )
        )
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Analytics tracking error: {e}")


def get_event_stats(
    session: Session,
    event_type: AnalyticsEventType,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[AnalyticsEvent]:
    """Events of one type, newest first, optionally within [start, end]."""
    statement = select(AnalyticsEvent).where(AnalyticsEvent.type == event_type)
    if start is not None:
        statement = statement.where(AnalyticsEvent.created_at >= start)
    if end is not None:
        statement = statement.where(AnalyticsEvent.created_at <= end)
    return list(session.exec(statement.order_by(AnalyticsEvent.created_at.desc())).all())


def approved_users_with_checklists(session: Session) -> list[tuple[User, UserChecklist]]:
    """All approved users that have a checklist, paired with it."""
    users = session.exec(select(User).where(User.status == UserStatus.APPROVED)).all()
    return [(user, user.checklist) for user in users if user.checklist is not None]


def _last_completion(checklist: UserChecklist) -> datetime | None:
    completions = [
        item.completed_at
        for item in checklist.items
        if item.status == ItemStatus.COMPLETE and item.completed_at is not None
    ]
    return max(completions) if completions else None


def get_user_completion_time(session: Session, user_id: UUID) -> dict | None:
    """Days from checklist creation to the user's most recent completion."""
    user = session.get(User, user_id)
    if user is None or user.checklist is None:
        return None

    checklist = user.checklist
    items = checklist.items
    completed = [
        i for i in items if i.status == ItemStatus.COMPLETE and i.completed_at is not None
    ]
    if not completed:
        return None

    end = max(i.completed_at for i in completed)
    return {
        "days_to_complete": days_between_ceil(checklist.created_at, end),
        "start_date": checklist.created_at,
        "end_date": end,
        "total_items": len(items),
        "completed_items": len(completed),
    }


def get_average_completion_time_by_role(session: Session) -> list[dict]:
    """Average days to latest completion per role, over users with any completion."""
    role_stats: dict[str, dict] = defaultdict(lambda: {"total": 0, "total_days": 0, "users": 0})

    for user, checklist in approved_users_with_checklists(session):
        last = _last_completion(checklist)
        if last is None:
            continue
        stats = role_stats[user.role.value]
        stats["total_days"] += days_between_ceil(checklist.created_at, last)
        stats["users"] += 1
        stats["total"] += len(checklist.items)

    return [
        {
            "role": role,
            "average_days": mean_of(stats["total_days"], stats["users"]),
            "total_users": stats["users"],
            "average_tasks": mean_of(stats["total"], stats["users"]),
        }
        for role, stats in role_stats.items()
    ]


def get_bottleneck_tasks(session: Session) -> list[dict]:
    """
    Rank tasks that are slow or commonly left unfinished.

    Items are grouped by (section title, item title) across all approved
    users. Tasks assigned fewer than three times are ignored as noise. The
    ten tasks with the lowest completion rate are returned, ties broken by
    the highest average days to complete.
    """
    task_stats: dict[str, dict] = {}

    for _, checklist in approved_users_with_checklists(session):
        for section in checklist.sections:
            for item in section.items:
                key = f"{section.title}::{item.title}"
                stats = task_stats.setdefault(
                    key,
                    {
                        "key": key,
                        "title": item.title,
                        "section": section.title,
                        "total": 0,
                        "completed": 0,
                        "in_progress": 0,
                        "not_started": 0,
                        "completion_times": [],
                    },
                )
                stats["total"] += 1

                if item.status == ItemStatus.COMPLETE:
                    stats["completed"] += 1
                    if item.completed_at and item.created_at:
                        stats["completion_times"].append(
                            days_between_ceil(item.created_at, item.completed_at)
                        )
                elif item.status == ItemStatus.IN_PROGRESS:
                    stats["in_progress"] += 1
                else:
                    stats["not_started"] += 1

    bottlenecks = []
    for stats in task_stats.values():
        if stats["total"] < MIN_ASSIGNMENTS_FOR_BOTTLENECK:
            continue
        times = stats["completion_times"]
        bottlenecks.append(
            {
                **stats,
                "completion_rate": percent(stats["completed"], stats["total"]),
                "average_days_to_complete": mean(times),
            }
        )

    bottlenecks.sort(key=lambda t: (t["completion_rate"], -t["average_days_to_complete"]))
    return bottlenecks[:MAX_BOTTLENECKS]


def _week_start(moment: datetime) -> str:
    """ISO date of the Sunday starting the week that contains moment."""
    days_since_sunday = (moment.weekday() + 1) % 7
    return (moment - timedelta(days=days_since_sunday)).date().isoformat()


def get_completion_trends(
    session: Session, days: int = 30, now: datetime | None = None
) -> list[dict]:
    """
    Weekly completion rate of users who joined in the last `days` days.

    Each user's items are bucketed by the week of their checklist's last
    activity.
    """
    now = now or utcnow()
    since = now - timedelta(days=days)

    weekly: dict[str, dict] = defaultdict(lambda: {"total": 0, "completed": 0})
    for user, checklist in approved_users_with_checklists(session):
        if user.created_at < since:
            continue
        items = checklist.items
        bucket = weekly[_week_start(checklist.updated_at)]
        bucket["total"] += len(items)
        bucket["completed"] += sum(1 for i in items if i.status == ItemStatus.COMPLETE)

    return [
        {
            "week": week,
            "completion_rate": percent(b["completed"], b["total"]),
            "total": b["total"],
            "completed": b["completed"],
        }
        for week, b in sorted(weekly.items())
    ]


def get_dashboard_stats(session: Session) -> dict:
    """Headline numbers for the admin analytics page."""
    # Local import: checklist.py imports track_event from this module.
    from app.onboarding.checklist import calculate_progress

    by_status = dict(
        session.exec(select(User.status, func.count()).group_by(User.status)).all()
    )
    by_role = dict(
        session.exec(
            select(User.role, func.count())
            .where(User.status == UserStatus.APPROVED)
            .group_by(User.role)
        ).all()
    )

    pairs = approved_users_with_checklists(session)
    percentages = [calculate_progress(checklist).percentage for _, checklist in pairs]

    return {
        "total_users": sum(by_status.values()),
        "pending_users": by_status.get(UserStatus.PENDING, 0),
        "approved_users": by_status.get(UserStatus.APPROVED, 0),
        "rejected_users": by_status.get(UserStatus.REJECTED, 0),
        "users_by_role": {role.value: count for role, count in by_role.items()},
        "users_with_checklist": len(pairs),
        "completed_onboarding": sum(1 for p in percentages if p == 100),
        "average_progress": mean(percentages),
    }
