"""Authentication routes: sign-in, sign-up, password reset and verification."""
from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.auth import Principal, get_current_principal, get_optional_principal
from app.core.config import settings
from app.core.database import get_session
from app.core.security import create_access_token
from app.models import AnalyticsEventType, Role, User
from app.onboarding import accounts
from app.onboarding.analytics import track_event
from app.routes.responses import unwrap, user_out

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    email: str = Form(...),
    password: str = Form(...),
    session: Session = Depends(get_session),
):
    """
    Sign in with email and password.

    Returns a bearer token and also sets it as an HTTP-only session cookie.
    Pending and rejected accounts can sign in; the staff area turns them
    away based on their status.
    """
    user = accounts.authenticate(session, email, password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(str(user.id), claims={"role": user.role.value})
    response = JSONResponse(
        {"access_token": token, "token_type": "bearer", "status": user.status.value}
    )
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout(
    principal: Principal | None = Depends(get_optional_principal),
    session: Session = Depends(get_session),
):
    """Clear the session cookie."""
    if principal is not None:
        track_event(session, AnalyticsEventType.LOGOUT, principal.id)
    response = JSONResponse({"success": True})
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.post("/signup", status_code=201)
async def signup(
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    role: Role = Form(...),
    session: Session = Depends(get_session),
):
    """Register a new account. It stays pending until an admin approves it."""
    result = unwrap(accounts.sign_up(session, name, email, password, role))
    return {"success": True, "user_id": result["user_id"]}


@router.post("/forgot-password")
async def forgot_password(email: str = Form(...), session: Session = Depends(get_session)):
    """Request a password reset link. Responds the same for unknown emails."""
    return unwrap(accounts.request_password_reset(session, email))


@router.get("/reset-password/{token}")
async def check_reset_token(token: str, session: Session = Depends(get_session)):
    return {"valid": accounts.validate_reset_token(session, token)}


@router.post("/reset-password")
async def reset_password(
    token: str = Form(...),
    password: str = Form(...),
    session: Session = Depends(get_session),
):
    return unwrap(accounts.reset_password(session, token, password))


@router.post("/verify-email")
async def verify_email(token: str = Form(...), session: Session = Depends(get_session)):
    return unwrap(accounts.verify_email(session, token))


@router.get("/me")
async def me(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """The signed-in user's account."""
    user = session.get(User, principal.id)
    return user_out(user)
