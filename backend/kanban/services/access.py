"""Board capability predicates.

Every check is computed from the board as currently loaded; nothing is
cached between requests.
"""

from sqlalchemy.orm import Session

from kanban.core.errors import Forbidden, NotFound
from kanban.db.models import Board, BoardList, Card


def can_view(board: Board, user_id: int) -> bool:
    if board.visibility == "public":
        return True
    permissions = board.permissions
    return (
        user_id in board.administrators
        or user_id in permissions["view"]
        or user_id in permissions["edit"]
        or user_id in permissions["admin"]
    )


def can_edit(board: Board, user_id: int) -> bool:
    # Board administrators are not included here; only the edit/admin sets count.
    permissions = board.permissions
    return user_id in permissions["edit"] or user_id in permissions["admin"]


def is_admin(board: Board, user_id: int) -> bool:
    return user_id in board.administrators or user_id in board.permissions["admin"]


def can_modify_contents(board: Board, user_id: int) -> bool:
    """Gate for list and card mutations: administrators or the edit set."""
    return user_id in board.administrators or user_id in board.permissions["edit"]


def get_board_or_404(db: Session, board_id: int) -> Board:
    board = db.get(Board, board_id)
    if not board:
        raise NotFound("Board not found")
    return board


def get_list_or_404(db: Session, list_id: int, message: str = "List not found") -> BoardList:
    board_list = db.get(BoardList, list_id)
    if not board_list:
        raise NotFound(message)
    return board_list


def get_card_or_404(db: Session, card_id: int) -> Card:
    card = db.get(Card, card_id)
    if not card:
        raise NotFound("Card not found")
    return card


def require_view(board: Board, user_id: int) -> None:
    if not can_view(board, user_id):
        raise Forbidden("Not authorized to view this board")


def require_contents_edit(board: Board, user_id: int) -> None:
    if not can_modify_contents(board, user_id):
        raise Forbidden("Not authorized to edit this board")


def resolve_list_board(db: Session, list_id: int, missing_list: str = "List not found") -> tuple[BoardList, Board]:
    board_list = get_list_or_404(db, list_id, missing_list)
    return board_list, get_board_or_404(db, board_list.board_id)


def resolve_card_board(db: Session, card_id: int) -> tuple[Card, Board]:
    card = get_card_or_404(db, card_id)
    _, board = resolve_list_board(db, card.list_id)
    return card, board
