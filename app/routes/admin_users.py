"""Admin routes for managing user accounts."""
from uuid import UUID

from fastapi import APIRouter, Depends, Form
from sqlmodel import Session

from app.core.auth import Principal, admin_principal
from app.core.database import get_session
from app.models import Role, UserStatus
from app.onboarding import users
from app.routes.responses import unwrap, user_out

router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.get("")
async def list_users(
    status: UserStatus | None = None,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return [user_out(u) for u in users.list_users(session, principal, status)]


@router.post("", status_code=201)
async def create_user(
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    role: Role = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """Create an approved account; its checklist is cloned immediately."""
    result = unwrap(users.create_user(session, principal, name, email, password, role))
    return user_out(result["user"])


@router.post("/{user_id}")
async def update_user(
    user_id: UUID,
    name: str = Form(...),
    email: str = Form(...),
    role: Role = Form(...),
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(users.update_user(session, principal, user_id, name, email, role))
    return user_out(result["user"])


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    return unwrap(users.delete_user(session, principal, user_id))


@router.post("/{user_id}/approve")
async def approve_user(
    user_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(users.approve_user(session, principal, user_id))
    return user_out(result["user"])


@router.post("/{user_id}/reject")
async def reject_user(
    user_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    result = unwrap(users.reject_user(session, principal, user_id))
    return user_out(result["user"])


@router.post("/{user_id}/reset-password")
async def reset_password(
    user_id: UUID,
    principal: Principal = Depends(admin_principal),
    session: Session = Depends(get_session),
):
    """Set a temporary password and return it once so the admin can pass it on."""
    return unwrap(users.reset_user_password(session, principal, user_id))
