import logging

from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.db.models import BoardList, User
from kanban.db.schemas import ListCreate, ListPatch
from kanban.services.access import get_board_or_404, require_contents_edit, require_view, resolve_list_board

logger = logging.getLogger(__name__)


def create_list(db: Session, user: User, payload: ListCreate) -> BoardList:
    if not payload.title or payload.board_id is None:
        raise ValidationError("Title and boardId are required")

    board = get_board_or_404(db, payload.board_id)
    require_contents_edit(board, user.id)

    # Read-count-then-write: concurrent creators may receive the same order.
    order = db.query(BoardList).filter(BoardList.board_id == board.id).count()
    board_list = BoardList(title=payload.title, board_id=board.id, created_by_id=user.id, order=order)
    db.add(board_list)
    db.commit()
    db.refresh(board_list)
    logger.info("User %s created list %s on board %s", user.id, board_list.id, board.id)
    return board_list


def list_board_lists(db: Session, user: User, board_id: int) -> list[BoardList]:
    board = get_board_or_404(db, board_id)
    require_view(board, user.id)
    return (
        db.query(BoardList)
        .filter(BoardList.board_id == board_id)
        .order_by(BoardList.order.asc(), BoardList.id.asc())
        .all()
    )


def update_list(db: Session, user: User, list_id: int, payload: ListPatch) -> BoardList:
    board_list, board = resolve_list_board(db, list_id)
    require_contents_edit(board, user.id)

    if payload.title:
        board_list.title = payload.title
    if payload.order is not None:
        board_list.order = payload.order

    db.commit()
    db.refresh(board_list)
    return board_list


def delete_list(db: Session, user: User, list_id: int) -> None:
    board_list, board = resolve_list_board(db, list_id)
    require_contents_edit(board, user.id)

    # Cards under the list stay behind.
    db.delete(board_list)
    db.commit()
    logger.info("User %s deleted list %s", user.id, list_id)
