from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import (
    MessageOut,
    ProjectCreate,
    ProjectOut,
    ProjectPatch,
    ProjectUpdateAdded,
    ProjectUpdateCreate,
    ProjectUpdatePage,
)
from kanban.db.session import get_db
from kanban.services import projects


router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return projects.create_project(db, current_user, payload)


@router.get("", response_model=list[ProjectOut])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return projects.list_projects(db, current_user)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return projects.get_project(db, current_user, project_id)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    payload: ProjectPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return projects.update_project(db, current_user, project_id, payload)


@router.delete("/{project_id}", response_model=MessageOut)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    projects.delete_project(db, current_user, project_id)
    return {"message": "Project deleted successfully"}


@router.post("/{project_id}/updates", response_model=ProjectUpdateAdded, status_code=status.HTTP_201_CREATED)
def add_project_update(
    project_id: int,
    payload: ProjectUpdateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry, project = projects.add_update(db, current_user, project_id, payload)
    return {"message": "Update added successfully", "update": entry, "project": project}


@router.get("/{project_id}/updates", response_model=ProjectUpdatePage)
def list_project_updates(
    project_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return projects.page_updates(db, current_user, project_id, page=page, limit=limit)
