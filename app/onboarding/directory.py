"""Staff directory."""
from sqlmodel import Session, select

from app.models import Role, User, UserStatus

ROLE_ORDER = {role: index for index, role in enumerate(Role)}


def list_directory(session: Session) -> list[User]:
    """Approved users ordered by role (declaration order), then name."""
    users = session.exec(select(User).where(User.status == UserStatus.APPROVED)).all()
    return sorted(
        users,
        key=lambda u: (ROLE_ORDER[u.role], u.name is None, (u.name or "").lower()),
    )
