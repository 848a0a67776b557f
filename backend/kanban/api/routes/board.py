from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import BoardCreate, BoardOut, BoardPatch, ListCreate, ListOut, MessageOut
from kanban.db.session import get_db
from kanban.services import boards, lists


router = APIRouter(prefix="/board", tags=["board"])


@router.post("", response_model=BoardOut, status_code=status.HTTP_201_CREATED)
def create_board(
    payload: BoardCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return boards.create_board(db, current_user, payload)


@router.get("", response_model=list[BoardOut])
def list_boards(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return boards.list_boards(db, current_user)


@router.get("/project/{project_id}", response_model=list[BoardOut])
def list_project_boards(
    project_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return boards.list_project_boards(db, project_id)


@router.get("/{board_id}", response_model=BoardOut)
def get_board(
    board_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return boards.get_board(db, current_user, board_id)


@router.put("/{board_id}", response_model=BoardOut)
def update_board(
    board_id: int,
    payload: BoardPatch,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return boards.update_board(db, board_id, payload)


@router.delete("/{board_id}", response_model=MessageOut)
def delete_board(
    board_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    boards.delete_board(db, board_id)
    return {"message": "Board deleted successfully"}


@router.get("/{board_id}/lists", response_model=list[ListOut])
def get_board_lists(
    board_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists.list_board_lists(db, current_user, board_id)


@router.post("/{board_id}/lists", response_model=ListOut, status_code=status.HTTP_201_CREATED)
def create_board_list(
    board_id: int,
    payload: ListCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    payload.board_id = board_id
    return lists.create_list(db, current_user, payload)
