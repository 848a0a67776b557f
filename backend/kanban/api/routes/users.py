from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user, require_grant
from kanban.db.models import User
from kanban.db.schemas import PermissionsUpdate, UserBrief, UserOut
from kanban.db.session import get_db
from kanban.services import users


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserBrief])
def list_users(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return users.list_users(db)


@router.put("/{user_id}/permissions", response_model=UserOut)
def set_user_permissions(
    user_id: int,
    payload: PermissionsUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_grant("users", "manage", "admin")),
):
    return users.set_permissions(db, user_id, payload.permissions)
