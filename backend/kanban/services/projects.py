"""Project lifecycle and the append-only project update log."""

import logging
import math

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kanban.core.errors import NotFound, ValidationError
from kanban.db.models import Project, ProjectUpdate, User, project_members
from kanban.db.schemas import ProjectCreate, ProjectPatch, ProjectUpdateCreate

logger = logging.getLogger(__name__)


def _users_by_id(db: Session, user_ids: list[int]) -> list[User]:
    if not user_ids:
        return []
    return db.query(User).filter(User.id.in_(set(user_ids))).all()


def _visible_query(db: Session, user: User):
    member_of = db.query(project_members.c.project_id).filter(project_members.c.user_id == user.id)
    return db.query(Project).filter(or_(Project.created_by_id == user.id, Project.id.in_(member_of)))


def create_project(db: Session, user: User, payload: ProjectCreate) -> Project:
    if not payload.title:
        raise ValidationError("Project title is required")

    project = Project(
        title=payload.title,
        description=payload.description,
        status=payload.status or "planning",
        priority=payload.priority or "medium",
        start_date=payload.start_date,
        end_date=payload.end_date,
        deadline=payload.deadline,
        created_by_id=user.id,
        members=_users_by_id(db, payload.members),
        tags=payload.tags,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("User %s created project %s", user.id, project.id)
    return project


def list_projects(db: Session, user: User) -> list[Project]:
    return _visible_query(db, user).order_by(Project.updated_at.desc(), Project.id.desc()).all()


def get_project(db: Session, user: User, project_id: int) -> Project:
    project = _visible_query(db, user).filter(Project.id == project_id).first()
    if not project:
        raise NotFound("Project not found")
    return project


def update_project(db: Session, user: User, project_id: int, payload: ProjectPatch) -> Project:
    # settings.allowMemberUpdates is stored on the project but members may always update.
    project = get_project(db, user, project_id)

    changes = payload.model_dump(exclude_unset=True)
    members = changes.pop("members", None)
    for key, value in changes.items():
        if value is None and key in {"title", "status", "priority", "tags", "progress"}:
            continue
        setattr(project, key, value)
    if members is not None:
        project.members = _users_by_id(db, members)

    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, user: User, project_id: int) -> None:
    project = (
        db.query(Project)
        .filter(Project.id == project_id, Project.created_by_id == user.id)
        .first()
    )
    if not project:
        raise NotFound("Project not found or unauthorized")

    # Boards that reference the project are left in place.
    db.delete(project)
    db.commit()
    logger.info("User %s deleted project %s", user.id, project_id)


def add_update(db: Session, user: User, project_id: int, payload: ProjectUpdateCreate) -> tuple[ProjectUpdate, Project]:
    project = get_project(db, user, project_id)
    if not payload.title:
        raise ValidationError("Update title is required")

    entry = ProjectUpdate(
        type=payload.type or "general",
        title=payload.title,
        description=payload.description,
        updated_by_id=user.id,
        priority=payload.priority or "medium",
        tags=payload.tags,
    )
    project.updates.append(entry)
    db.commit()
    db.refresh(entry)
    db.refresh(project)
    return entry, project


def page_updates(db: Session, user: User, project_id: int, page: int = 1, limit: int = 10) -> dict:
    project = get_project(db, user, project_id)
    page = max(page, 1)
    limit = max(limit, 1)
    skip = (page - 1) * limit

    ordered = sorted(project.updates, key=lambda item: (item.created_at, item.id), reverse=True)
    total = len(ordered)
    return {
        "updates": ordered[skip : skip + limit],
        "pagination": {
            "current_page": page,
            "total_pages": math.ceil(total / limit),
            "total_updates": total,
            "has_more": skip + limit < total,
        },
    }
