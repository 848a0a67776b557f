from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import ListCreate, ListOut, ListPatch, MessageOut
from kanban.db.session import get_db
from kanban.services import lists


router = APIRouter(prefix="/lists", tags=["lists"])


@router.post("", response_model=ListOut, status_code=status.HTTP_201_CREATED)
def create_list(
    payload: ListCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists.create_list(db, current_user, payload)


@router.get("/board/{board_id}", response_model=list[ListOut])
def list_board_lists(
    board_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists.list_board_lists(db, current_user, board_id)


@router.put("/{list_id}", response_model=ListOut)
def update_list(
    list_id: int,
    payload: ListPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists.update_list(db, current_user, list_id, payload)


@router.delete("/{list_id}", response_model=MessageOut)
def delete_list(
    list_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lists.delete_list(db, current_user, list_id)
    return {"message": "List deleted successfully"}
