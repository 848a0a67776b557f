import logging

from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.db.models import Board, BoardMember, Project, User, utcnow
from kanban.db.schemas import BoardCreate, BoardPatch
from kanban.services.access import get_board_or_404, require_view

logger = logging.getLogger(__name__)

PERMISSION_LEVELS = ("view", "edit", "admin")


def default_configuration() -> dict:
    return {
        "columns": [
            {"name": "To Do", "statusIds": ["todo"], "color": "#0052CC"},
            {"name": "In Progress", "statusIds": ["inprogress"], "color": "#0052CC"},
            {"name": "Done", "statusIds": ["done"], "color": "#0052CC"},
        ],
        "quickFilters": [],
        "swimlanes": {"type": "none", "queries": []},
        "cardLayout": {"fields": [], "colors": {"issueType": True, "priority": True}},
        "workingDays": {
            "monday": True,
            "tuesday": True,
            "wednesday": True,
            "thursday": True,
            "friday": True,
            "saturday": False,
            "sunday": False,
        },
        "estimation": {"field": "story_points", "timeFormat": "hours"},
    }


def create_board(db: Session, user: User, payload: BoardCreate) -> Board:
    if not payload.name:
        raise ValidationError("Board name is required")

    if payload.project_id is None:
        # Committed on its own; a failure below leaves this project without a board.
        project = Project(
            title=f"{payload.name} Project",
            description=f"Default project for {payload.name} board",
            created_by_id=user.id,
        )
        db.add(project)
        db.commit()
        project_id = project.id
        logger.info("Created default project %s for board %r", project_id, payload.name)
    else:
        if not db.get(Project, payload.project_id):
            raise ValidationError("Project not found")
        project_id = payload.project_id

    board = Board(
        name=payload.name,
        description=payload.description or "",
        project_id=project_id,
        type=payload.type or "kanban",
        visibility=payload.visibility or "public",
        configuration=default_configuration(),
        statistics={"totalIssues": 0, "lastViewed": utcnow().isoformat(), "viewCount": 0},
        is_active=True,
        memberships=[BoardMember(user_id=user.id, role=role) for role in ("administrator",) + PERMISSION_LEVELS],
    )
    db.add(board)
    db.commit()
    db.refresh(board)
    logger.info("User %s created board %s", user.id, board.id)
    return board


def list_boards(db: Session, user: User) -> list[Board]:
    """Boards the user is related to; public visibility alone does not qualify."""
    related = db.query(BoardMember.board_id).filter(BoardMember.user_id == user.id)
    return db.query(Board).filter(Board.id.in_(related)).order_by(Board.id).all()


def get_board(db: Session, user: User, board_id: int) -> Board:
    board = get_board_or_404(db, board_id)
    require_view(board, user.id)
    return board


def list_project_boards(db: Session, project_id: int) -> list[Board]:
    # No visibility filter: any authenticated caller sees every board of the project.
    return db.query(Board).filter(Board.project_id == project_id).order_by(Board.id).all()


def update_board(db: Session, board_id: int, payload: BoardPatch) -> Board:
    # Unconditional replace; no permission check is made before writing.
    board = get_board_or_404(db, board_id)

    changes = payload.model_dump(exclude_unset=True, exclude={"administrators", "permissions"})
    for key, value in changes.items():
        if value is None:
            if key != "description":
                continue
            value = ""
        setattr(board, key, value)

    if payload.administrators is not None:
        board.set_members("administrator", payload.administrators)
    if payload.permissions is not None:
        for level in PERMISSION_LEVELS:
            if level in payload.permissions.model_fields_set:
                board.set_members(level, getattr(payload.permissions, level))

    db.commit()
    db.refresh(board)
    return board


def delete_board(db: Session, board_id: int) -> None:
    # Lists and cards of the board are not removed.
    board = db.get(Board, board_id)
    if board:
        db.delete(board)
        db.commit()
        logger.info("Deleted board %s", board_id)
