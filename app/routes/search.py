"""Search routes."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Principal, get_optional_principal
from app.core.database import get_session
from app.models import AnalyticsEventType
from app.onboarding.analytics import track_event
from app.onboarding.search import global_search, quick_search

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("")
async def search(
    q: str = "",
    quick: bool = False,
    principal: Principal | None = Depends(get_optional_principal),
    session: Session = Depends(get_session),
):
    """
    Search tasks, documents, FAQs and (for admins) users.

    Queries shorter than two characters return no results. With quick=true
    only the top results are returned.
    """
    results = (quick_search if quick else global_search)(session, q, principal)
    if results and principal is not None:
        track_event(
            session,
            AnalyticsEventType.SEARCH,
            principal.id,
            {"query": q.strip(), "results": len(results)},
        )
    return {"query": q, "results": [r.to_dict() for r in results]}
