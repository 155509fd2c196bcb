"""Checklist routes for the signed-in staff member."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form
from fastapi.responses import Response
from sqlmodel import Session

from app.core.auth import Principal, approved_principal
from app.core.database import get_session
from app.models import ItemStatus, User
from app.onboarding.checklist import calculate_progress, get_user_checklist, update_item_status
from app.onboarding.export import (
    build_export_data,
    export_filename,
    export_to_csv,
    export_to_json,
)
from app.routes.responses import checklist_out, unwrap

router = APIRouter(prefix="/app/checklist", tags=["checklist"])


@router.get("")
async def my_checklist(
    principal: Principal = Depends(approved_principal),
    session: Session = Depends(get_session),
):
    """
    The principal's checklist with progress.

    If the user has no checklist yet it is cloned from their role template.
    The checklist is null when no template exists for the role.
    """
    checklist = get_user_checklist(session, principal.id, principal.role)
    return {
        "checklist": checklist_out(checklist),
        "progress": calculate_progress(checklist).to_dict(),
    }


@router.post("/items/{item_id}/status")
async def set_item_status(
    item_id: UUID,
    status: ItemStatus = Form(...),
    principal: Principal = Depends(approved_principal),
    session: Session = Depends(get_session),
):
    """Set one of the principal's items to NOT_STARTED, IN_PROGRESS or COMPLETE."""
    return unwrap(update_item_status(session, principal, item_id, status))


def _export(session: Session, principal: Principal):
    user = session.get(User, principal.id)
    checklist = get_user_checklist(session, principal.id, principal.role)
    return build_export_data(checklist, user)


@router.get("/export.csv")
async def export_csv(
    principal: Principal = Depends(approved_principal),
    session: Session = Depends(get_session),
):
    filename = export_filename(principal.role.value, "csv")
    return Response(
        content=export_to_csv(_export(session, principal)),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export.json")
async def export_json(
    principal: Principal = Depends(approved_principal),
    session: Session = Depends(get_session),
):
    filename = export_filename(principal.role.value, "json")
    return Response(
        content=export_to_json(_export(session, principal)),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
