"""Authenticated principal and authorization checks.

Onboarding operations receive the acting user explicitly as a Principal
instead of looking up a request-global "current user". The FastAPI
dependencies at the bottom of this module build that Principal from the
session token of the incoming request.
"""
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.core.config import settings
from app.core.database import get_session
from app.core.security import InvalidTokenError, decode_access_token
from app.models import Role, User, UserStatus

_http_bearer = HTTPBearer(auto_error=False)


class AuthorizationError(Exception):
    """Raised when the acting principal may not perform an operation."""


@dataclass(frozen=True)
class Principal:
    """The authenticated user performing an operation."""
    id: UUID
    email: str
    name: str | None
    role: Role
    status: UserStatus

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            status=user.status,
        )


def require_auth(principal: Principal | None) -> Principal:
    """Return the principal, or raise if nobody is signed in."""
    if principal is None:
        raise AuthorizationError("Unauthorized")
    return principal


def require_admin(principal: Principal | None) -> Principal:
    """Return the principal, or raise unless it is an administrator."""
    principal = require_auth(principal)
    if not principal.is_admin:
        raise AuthorizationError("Forbidden: Admin access required")
    return principal


def _token_from_request(
    request: Request, bearer: HTTPAuthorizationCredentials | None
) -> str | None:
    if bearer and bearer.credentials:
        return bearer.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_principal(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Depends(_http_bearer),
    session: Session = Depends(get_session),
) -> Principal | None:
    """Resolve the session token to a Principal, or None when signed out.

    The user row is re-read on every request so role and status changes
    take effect without waiting for the token to expire.
    """
    token = _token_from_request(request, bearer)
    if not token:
        return None

    try:
        payload = decode_access_token(token)
    except InvalidTokenError:
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    try:
        user = session.get(User, UUID(subject))
    except ValueError:
        return None
    if user is None:
        return None
    return Principal.from_user(user)


async def get_current_principal(
    principal: Principal | None = Depends(get_optional_principal),
) -> Principal:
    """Dependency for routes that require a signed-in, non-rejected user."""
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    if principal.status == UserStatus.REJECTED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account rejected")
    return principal


async def admin_principal(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Dependency for admin-only routes."""
    if not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return principal


async def approved_principal(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Dependency for the staff area, which pending accounts cannot use yet."""
    if principal.status != UserStatus.APPROVED and not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Account pending approval"
        )
    return principal
