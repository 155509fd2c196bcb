"""Admin analytics routes."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Principal, admin_principal
from app.core.database import get_session
from app.onboarding.analytics import (
    get_average_completion_time_by_role,
    get_bottleneck_tasks,
    get_completion_trends,
    get_dashboard_stats,
)
from app.onboarding.insights import (
    forecast_completions,
    get_comparative_analytics,
    identify_at_risk_users,
)

router = APIRouter(prefix="/admin/analytics", tags=["admin"])


@router.get("")
async def analytics(
    days: int = 30,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """Dashboard numbers, completion times by role, bottlenecks and weekly trends."""
    return {
        "dashboard": get_dashboard_stats(session),
        "completion_time_by_role": get_average_completion_time_by_role(session),
        "bottlenecks": get_bottleneck_tasks(session),
        "trends": get_completion_trends(session, days=days),
    }


@router.get("/insights")
async def insights(
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """At-risk users, completion forecasts and role comparison."""
    return {
        "at_risk_users": [p.to_dict() for p in identify_at_risk_users(session)],
        "forecasts": [f.to_dict() for f in forecast_completions(session)],
        "comparative": get_comparative_analytics(session),
    }
