from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


UserRole = Literal["admin", "project_manager", "developer", "tester", "user"]
ProjectStatus = Literal["planning", "active", "on_hold", "completed", "cancelled"]
ProjectPriority = Literal["low", "medium", "high", "critical"]
UpdateType = Literal[
    "status", "milestone", "note", "member_added", "member_removed", "file_upload", "task_completed", "general"
]
BoardType = Literal["scrum", "kanban", "next_gen"]
Visibility = Literal["public", "private"]
CardPriority = Literal["low", "medium", "high", "urgent"]
CardStatus = Literal["active", "archived", "completed"]


class CamelModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


# --- Users / auth ---
class RegisterRequest(CamelModel):
    name: str | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str
    password: str


class PermissionGrant(CamelModel):
    resource: str
    actions: list[str] = Field(default_factory=list)


class UserBrief(CamelModel):
    id: int
    name: str
    email: str


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    username: str | None
    display_name: str | None
    avatar: str
    job_title: str | None
    department: str | None
    location: str | None
    timezone: str
    language: str
    phone_number: str | None
    role: UserRole
    is_active: bool
    last_login: datetime | None
    preferences: dict[str, Any]
    permissions: list[PermissionGrant]
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserOut
    token: str
    token_type: str = "bearer"


class ProfileUpdate(CamelModel):
    name: str | None = None
    username: str | None = None
    display_name: str | None = None
    avatar: str | None = None
    job_title: str | None = None
    department: str | None = None
    location: str | None = None
    timezone: str | None = None
    language: str | None = None
    phone_number: str | None = None
    preferences: dict[str, Any] | None = None


class PermissionsUpdate(CamelModel):
    permissions: list[PermissionGrant]


# --- Projects ---
class ProjectCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    priority: ProjectPriority | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    deadline: datetime | None = None
    members: list[int] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class ProjectPatch(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    priority: ProjectPriority | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    deadline: datetime | None = None
    tags: list[str] | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    members: list[int] | None = None


class ProjectBrief(CamelModel):
    id: int
    title: str
    description: str | None


class ProjectUpdateCreate(CamelModel):
    type: UpdateType | None = None
    title: str | None = None
    description: str | None = None
    priority: ProjectPriority | None = None
    tags: list[str] = Field(default_factory=list)


class ProjectUpdateOut(CamelModel):
    id: int
    type: UpdateType
    title: str
    description: str | None
    priority: ProjectPriority
    tags: list[str]
    updated_by: UserBrief
    created_at: datetime


class ProjectOut(CamelModel):
    id: int
    title: str
    description: str | None
    status: ProjectStatus
    priority: ProjectPriority
    start_date: datetime | None
    end_date: datetime | None
    deadline: datetime | None
    progress: int
    created_by: UserBrief
    members: list[UserBrief]
    updates: list[ProjectUpdateOut]
    tags: list[str]
    is_archived: bool
    settings: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class ProjectUpdateAdded(BaseModel):
    message: str
    update: ProjectUpdateOut
    project: ProjectOut


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_updates: int
    has_more: bool


class ProjectUpdatePage(BaseModel):
    updates: list[ProjectUpdateOut]
    pagination: Pagination


# --- Boards ---
class BoardPermissions(CamelModel):
    view: list[int] = Field(default_factory=list)
    edit: list[int] = Field(default_factory=list)
    admin: list[int] = Field(default_factory=list)

    @field_validator("view", "edit", "admin", mode="before")
    @classmethod
    def _sorted_ids(cls, value):
        return sorted(value) if value is not None else value


class BoardCreate(CamelModel):
    name: str | None = None
    description: str | None = None
    project_id: int | None = None
    type: BoardType | None = None
    visibility: Visibility | None = None


class BoardPatch(CamelModel):
    name: str | None = None
    description: str | None = None
    type: BoardType | None = None
    visibility: Visibility | None = None
    configuration: dict[str, Any] | None = None
    statistics: dict[str, Any] | None = None
    is_active: bool | None = None
    administrators: list[int] | None = None
    permissions: BoardPermissions | None = None


class BoardOut(CamelModel):
    id: int
    name: str
    description: str
    project_id: int
    project: ProjectBrief | None
    type: BoardType
    administrators: list[int]
    permissions: BoardPermissions
    visibility: Visibility
    configuration: dict[str, Any]
    statistics: dict[str, Any]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("administrators", mode="before")
    @classmethod
    def _sorted_ids(cls, value):
        return sorted(value) if value is not None else value


# --- Lists ---
class ListCreate(CamelModel):
    title: str | None = None
    board_id: int | None = None


class ListPatch(CamelModel):
    title: str | None = None
    order: int | None = None


class ListOut(CamelModel):
    id: int
    title: str
    board_id: int
    created_by: UserBrief
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


# --- Cards ---
class Label(CamelModel):
    name: str | None = None
    color: str | None = None


class CardCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    assigned_to_id: int | None = Field(default=None, alias="assignedTo")
    priority: CardPriority | None = None


class CardPatch(CamelModel):
    title: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    assigned_to_id: int | None = Field(default=None, alias="assignedTo")
    priority: CardPriority | None = None
    labels: list[Label] | None = None
    status: CardStatus | None = None


class CardMove(CamelModel):
    new_list_id: int
    new_order: int | None = None


class AttachmentOut(CamelModel):
    id: int
    filename: str
    original_name: str
    size: int
    mimetype: str
    url: str
    uploaded_by: UserBrief
    uploaded_at: datetime


class CardOut(CamelModel):
    id: int
    title: str
    list_id: int
    description: str
    due_date: datetime | None
    order: int
    attachments: list[AttachmentOut]
    assigned_to_id: int | None
    assigned_to: UserBrief | None
    created_by: UserBrief
    labels: list[Label]
    priority: CardPriority
    status: CardStatus
    created_at: datetime
    updated_at: datetime


class AttachmentUploaded(BaseModel):
    message: str
    attachment: AttachmentOut
    attachments: list[AttachmentOut]
    card: CardOut


class AttachmentDeleted(BaseModel):
    message: str
    card: CardOut


# --- Teams ---
class TeamCreate(CamelModel):
    name: str | None = None
    members: list[int] = Field(default_factory=list)


class TeamOut(CamelModel):
    id: int
    name: str
    members: list[UserBrief]
    created_by_id: int
    created_at: datetime


# --- Reports ---
class TaskStatusReport(CamelModel):
    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]


class TasksPerUserRow(CamelModel):
    user_id: int | None
    name: str
    tasks: int
    completed: int
    pending: int


class MessageOut(BaseModel):
    message: str
