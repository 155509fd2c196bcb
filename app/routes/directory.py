"""Staff directory for approved team members."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Principal, approved_principal
from app.core.database import get_session
from app.models import ROLE_NAMES
from app.onboarding.directory import list_directory

router = APIRouter(prefix="/app/directory", tags=["directory"])


@router.get("")
async def directory(
    principal: Principal = Depends(approved_principal),
    session: Session = Depends(get_session),
):
    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
            "role_name": ROLE_NAMES[user.role],
            "created_at": user.created_at,
        }
        for user in list_directory(session)
    ]
