from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import TasksPerUserRow, TaskStatusReport
from kanban.db.session import get_db
from kanban.services import reports


router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/task-status", response_model=TaskStatusReport)
def task_status(
    board_id: int | None = Query(None, alias="boardId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return reports.task_status(db, current_user, board_id)


@router.get("/tasks-per-user", response_model=list[TasksPerUserRow])
def tasks_per_user(
    board_id: int | None = Query(None, alias="boardId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return reports.tasks_per_user(db, current_user, board_id)
