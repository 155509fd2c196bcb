"""Account settings routes."""
from fastapi import APIRouter, Depends, Form
from sqlmodel import Session

from app.core.auth import Principal, get_current_principal
from app.core.database import get_session
from app.onboarding import accounts
from app.routes.responses import unwrap

router = APIRouter(prefix="/app/settings", tags=["settings"])


@router.post("/profile")
async def update_profile(
    name: str = Form(...),
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return unwrap(accounts.update_profile(session, principal, name))


@router.post("/password")
async def update_password(
    current_password: str = Form(...),
    new_password: str = Form(...),
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    return unwrap(accounts.update_password(session, principal, current_password, new_password))


@router.post("/resend-verification")
async def resend_verification(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """Email a new verification link to the signed-in user."""
    return unwrap(accounts.send_verification_email(session, principal))
