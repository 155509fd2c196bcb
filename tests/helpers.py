"""Helpers shared by the test modules."""

from sqlmodel import Session

from app.core.security import create_access_token, hash_password
from app.models import Role, User, UserStatus

PASSWORD = "password123"
# bcrypt is slow on purpose; hash the shared test password once
PASSWORD_HASH = hash_password(PASSWORD)


def auth_headers(user: User) -> dict:
    """Bearer token header for a user."""
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


def make_user(
    session: Session,
    email: str,
    role: Role = Role.RN,
    status: UserStatus = UserStatus.APPROVED,
    name: str = "Test User",
) -> User:
    user = User(
        email=email,
        name=name,
        password_hash=PASSWORD_HASH,
        role=role,
        status=status,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
