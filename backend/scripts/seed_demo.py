from sqlalchemy.orm import Session

from kanban.core.security import hash_password
from kanban.db.models import Base, Board, BoardList, Card, User
from kanban.db.schemas import BoardCreate
from kanban.db.session import DATABASE_URL, SessionLocal, engine
from kanban.services.boards import create_board


def upsert_user(db: Session, name: str, email: str, password: str, role: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(name=name, email=email, username=email.split("@")[0], password_hash="", role=role)
        db.add(user)
    user.name = name
    user.role = role
    user.password_hash = hash_password(password)
    db.commit()
    db.refresh(user)
    return user


def ensure_board(db: Session, owner: User, name: str) -> Board:
    board = db.query(Board).filter(Board.name == name).first()
    if board:
        return board
    return create_board(db, owner, BoardCreate(name=name, type="kanban", visibility="private"))


def ensure_list(db: Session, board: Board, owner: User, title: str) -> BoardList:
    board_list = db.query(BoardList).filter(BoardList.board_id == board.id, BoardList.title == title).first()
    if board_list:
        return board_list
    order = db.query(BoardList).filter(BoardList.board_id == board.id).count()
    board_list = BoardList(title=title, board_id=board.id, created_by_id=owner.id, order=order)
    db.add(board_list)
    db.commit()
    db.refresh(board_list)
    return board_list


def ensure_card(db: Session, board_list: BoardList, owner: User, title: str, assignee: User | None = None) -> None:
    card = db.query(Card).filter(Card.list_id == board_list.id, Card.title == title).first()
    if card:
        card.assigned_to_id = assignee.id if assignee else None
        db.commit()
        return

    order = db.query(Card).filter(Card.list_id == board_list.id).count()
    db.add(
        Card(
            title=title,
            list_id=board_list.id,
            created_by_id=owner.id,
            assigned_to_id=assignee.id if assignee else None,
            order=order,
        )
    )
    db.commit()


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        manager = upsert_user(db, "Anna Lead", "anna@kanban.local", "anna_password", "project_manager")
        developer = upsert_user(db, "Dev Demo", "dev@kanban.local", "dev_password", "developer")

        board = ensure_board(db, manager, "Demo Sprint")
        board.set_members("edit", board.permissions["edit"] | {developer.id})
        db.commit()

        todo = ensure_list(db, board, manager, "To Do")
        ensure_list(db, board, manager, "In Progress")
        ensure_list(db, board, manager, "Done")

        ensure_card(db, todo, manager, "Write onboarding notes", developer)
        ensure_card(db, todo, manager, "Plan sprint review", manager)
    finally:
        db.close()
    print(f"Demo seed complete: {DATABASE_URL}")


if __name__ == "__main__":
    main()
