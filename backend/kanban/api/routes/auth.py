from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserOut
from kanban.db.session import get_db
from kanban.services import users


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user, token = users.register(db, payload)
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = users.login(db, payload.email, payload.password)
    return {"user": user, "token": token}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserOut)
def update_me(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return users.update_profile(db, current_user, payload)
