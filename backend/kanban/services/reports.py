"""Card aggregates behind the status pie and tasks-per-user charts."""

from collections import Counter

from sqlalchemy.orm import Session

from kanban.db.models import CARD_PRIORITIES, CARD_STATUSES, BoardList, Card, User
from kanban.services.access import get_board_or_404, require_view
from kanban.services.boards import list_boards


def _scoped_cards(db: Session, user: User, board_id: int | None) -> list[Card]:
    if board_id is not None:
        board = get_board_or_404(db, board_id)
        require_view(board, user.id)
        board_ids = [board.id]
    else:
        board_ids = [board.id for board in list_boards(db, user)]
    if not board_ids:
        return []

    list_ids = db.query(BoardList.id).filter(BoardList.board_id.in_(board_ids))
    return db.query(Card).filter(Card.list_id.in_(list_ids)).all()


def task_status(db: Session, user: User, board_id: int | None = None) -> dict:
    cards = _scoped_cards(db, user, board_id)
    by_status = Counter(card.status for card in cards)
    by_priority = Counter(card.priority for card in cards)
    return {
        "total": len(cards),
        "by_status": {status: by_status.get(status, 0) for status in CARD_STATUSES},
        "by_priority": {priority: by_priority.get(priority, 0) for priority in CARD_PRIORITIES},
    }


def tasks_per_user(db: Session, user: User, board_id: int | None = None) -> list[dict]:
    rows: dict[int | None, dict] = {}
    for card in _scoped_cards(db, user, board_id):
        key = card.assigned_to_id
        if key not in rows:
            name = card.assigned_to.name if card.assigned_to else "Unassigned"
            rows[key] = {"user_id": key, "name": name, "tasks": 0, "completed": 0, "pending": 0}
        row = rows[key]
        row["tasks"] += 1
        if card.status == "completed":
            row["completed"] += 1
        elif card.status == "active":
            row["pending"] += 1
    return sorted(rows.values(), key=lambda row: (-row["tasks"], row["name"]))
