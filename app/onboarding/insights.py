"""Onboarding insights: risk flags, completion forecasts and role comparisons.

None of these results are stored; they are recomputed from the checklists of
approved users on every call.
"""
import math
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from sqlmodel import Session

from app.core.clock import days_between, days_between_ceil, utcnow
from app.models import ItemStatus, UserChecklist
from app.onboarding.analytics import approved_users_with_checklists
from app.onboarding.checklist import calculate_progress
from app.onboarding.stats import mean_of, percent

RISK_ORDER = {"high": 3, "medium": 2, "low": 1}


@dataclass
class UserRiskProfile:
    user_id: UUID
    name: str | None
    email: str
    role: str
    progress: int
    risk_level: str = "low"
    risk_factors: list[str] = field(default_factory=list)
    predicted_completion_date: datetime | None = None
    days_since_start: int = 0

    def raise_to(self, level: str) -> None:
        """Raise the risk level; never lowers it."""
        if RISK_ORDER[level] > RISK_ORDER[self.risk_level]:
            self.risk_level = level

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CompletionForecast:
    user_id: UUID
    name: str | None
    email: str
    role: str
    current_progress: int
    predicted_completion_date: datetime | None
    confidence: str

    def to_dict(self) -> dict:
        return asdict(self)


def project_completion_date(
    percentage: int, days_since_start: int, now: datetime
) -> datetime | None:
    """
    Linear-rate forecast of when a checklist will reach 100%.

    The rate is percent completed per day since the checklist was created.
    Returns None when there is nothing to project: no progress yet, already
    complete, or started today (no elapsed days to derive a rate from).
    """
    if not 0 < percentage < 100 or days_since_start <= 0:
        return None
    rate = percentage / days_since_start
    if rate <= 0:
        return None
    days_remaining = math.ceil((100 - percentage) / rate)
    return now + timedelta(days=days_remaining)


def _overdue_count(checklist: UserChecklist, now: datetime) -> int:
    return sum(
        1
        for item in checklist.items
        if item.due_date is not None
        and item.due_date < now
        and item.status != ItemStatus.COMPLETE
    )


def _recent_completions(checklist: UserChecklist, now: datetime, days: int = 7) -> int:
    since = now - timedelta(days=days)
    return sum(
        1
        for item in checklist.items
        if item.status == ItemStatus.COMPLETE
        and item.completed_at is not None
        and item.completed_at > since
    )


def build_risk_profile(user, checklist: UserChecklist, now: datetime) -> UserRiskProfile:
    """Apply the risk rules to one user's checklist."""
    progress = calculate_progress(checklist)
    pct = progress.percentage
    days_since_start = days_between(checklist.created_at, now)

    profile = UserRiskProfile(
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        progress=pct,
        days_since_start=days_since_start,
    )

    # Slow start
    if days_since_start > 14 and pct < 25:
        profile.risk_factors.append("Low progress after 2+ weeks")
        profile.raise_to("high")
    elif days_since_start > 7 and pct < 50:
        profile.risk_factors.append("Below expected progress")
        profile.raise_to("medium")

    overdue = _overdue_count(checklist, now)
    if overdue > 0:
        profile.risk_factors.append(f"{overdue} overdue task(s)")
        profile.raise_to("high" if overdue >= 3 else "medium")

    if days_between(checklist.updated_at, now) > 7 and pct < 100:
        profile.risk_factors.append("No activity in last 7 days")
        profile.raise_to("medium")

    if days_since_start > 10 and pct < 50 and _recent_completions(checklist, now) == 0:
        profile.risk_factors.append("No recent task completions")
        profile.raise_to("medium")

    profile.predicted_completion_date = project_completion_date(pct, days_since_start, now)
    return profile


def identify_at_risk_users(
    session: Session, now: datetime | None = None
) -> list[UserRiskProfile]:
    """
    Risk profiles for approved users with a checklist.

    Users who are finished and carry no risk are left out. The rest are
    ordered by risk level (high first), then by progress (lowest first).
    """
    now = now or utcnow()
    profiles = [
        build_risk_profile(user, checklist, now)
        for user, checklist in approved_users_with_checklists(session)
    ]
    profiles = [p for p in profiles if not (p.risk_level == "low" and p.progress == 100)]
    profiles.sort(key=lambda p: (-RISK_ORDER[p.risk_level], p.progress))
    return profiles


def forecast_confidence(days_since_start: int, percentage: int) -> str:
    if days_since_start >= 7 and percentage >= 25:
        return "high"
    if days_since_start >= 3 and percentage >= 10:
        return "medium"
    return "low"


def forecast_completions(
    session: Session, now: datetime | None = None
) -> list[CompletionForecast]:
    """
    Forecast a completion date for every approved user still onboarding.

    Users already at 100% are omitted. Results are ordered by predicted
    date, soonest first, with users that have no prediction last.
    """
    now = now or utcnow()
    forecasts = []

    for user, checklist in approved_users_with_checklists(session):
        pct = calculate_progress(checklist).percentage
        if pct == 100:
            continue

        days_since_start = days_between(checklist.created_at, now)
        predicted = project_completion_date(pct, days_since_start, now)
        confidence = (
            forecast_confidence(days_since_start, pct) if predicted is not None else "low"
        )
        forecasts.append(
            CompletionForecast(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role.value,
                current_progress=pct,
                predicted_completion_date=predicted,
                confidence=confidence,
            )
        )

    forecasts.sort(
        key=lambda f: (f.predicted_completion_date is None, f.predicted_completion_date or now)
    )
    return forecasts


def get_comparative_analytics(session: Session) -> list[dict]:
    """
    Compare onboarding across roles.

    For each role: average progress, average tasks per user, the share of
    users who have finished, and for those who finished the average days
    from checklist creation to their last completion.
    """
    role_stats: dict[str, dict] = defaultdict(
        lambda: {
            "total_users": 0,
            "progress_sum": 0,
            "total_tasks": 0,
            "completed_users": 0,
            "completion_days_sum": 0,
        }
    )

    for user, checklist in approved_users_with_checklists(session):
        items = checklist.items
        completed = [
            i for i in items if i.status == ItemStatus.COMPLETE and i.completed_at is not None
        ]

        stats = role_stats[user.role.value]
        stats["total_users"] += 1
        stats["progress_sum"] += calculate_progress(checklist).percentage
        stats["total_tasks"] += len(items)

        if items and len(completed) == len(items):
            last = max(i.completed_at for i in completed)
            stats["completion_days_sum"] += days_between_ceil(checklist.created_at, last)
            stats["completed_users"] += 1

    return [
        {
            "role": role,
            "total_users": stats["total_users"],
            "average_progress": mean_of(stats["progress_sum"], stats["total_users"]),
            "average_completion_time": mean_of(
                stats["completion_days_sum"], stats["completed_users"]
            ),
            "completion_rate": percent(stats["completed_users"], stats["total_users"]),
            "average_tasks_per_user": mean_of(stats["total_tasks"], stats["total_users"]),
        }
        for role, stats in role_stats.items()
    ]
