from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


USER_ROLES = ("admin", "project_manager", "developer", "tester", "user")
PROJECT_STATUSES = ("planning", "active", "on_hold", "completed", "cancelled")
PROJECT_PRIORITIES = ("low", "medium", "high", "critical")
UPDATE_TYPES = (
    "status",
    "milestone",
    "note",
    "member_added",
    "member_removed",
    "file_upload",
    "task_completed",
    "general",
)
BOARD_TYPES = ("scrum", "kanban", "next_gen")
BOARD_VISIBILITIES = ("public", "private")
BOARD_ROLES = ("administrator", "view", "edit", "admin")
CARD_PRIORITIES = ("low", "medium", "high", "urgent")
CARD_STATUSES = ("active", "archived", "completed")


def _in(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


def default_preferences() -> dict:
    return {
        "theme": "light",
        "emailNotifications": True,
        "inAppNotifications": True,
        "dashboardLayout": "default",
    }


def default_project_settings() -> dict:
    return {"allowMemberUpdates": True, "requireApproval": False, "emailNotifications": True}


project_members = Table(
    "ProjectMembers",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("Projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("Users.id", ondelete="CASCADE"), primary_key=True),
)

team_members = Table(
    "TeamMembers",
    Base.metadata,
    Column("team_id", Integer, ForeignKey("Teams.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("Users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "Users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    username = Column(String, unique=True)
    password_hash = Column(String, nullable=False)
    display_name = Column(String)
    avatar = Column(String, nullable=False, default="")
    job_title = Column(String)
    department = Column(String)
    location = Column(String)
    timezone = Column(String, nullable=False, default="UTC")
    language = Column(String, nullable=False, default="en")
    phone_number = Column(String)
    role = Column(String, nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True))
    preferences = Column(JSON, nullable=False, default=default_preferences)
    permissions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (CheckConstraint(_in("role", USER_ROLES), name="ck_users_role"),)

    def has_permission(self, resource: str, action: str) -> bool:
        for grant in self.permissions or []:
            if grant.get("resource") == resource:
                return action in (grant.get("actions") or [])
        return False


class Project(Base):
    __tablename__ = "Projects"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    status = Column(String, nullable=False, default="planning")
    priority = Column(String, nullable=False, default="medium")
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    deadline = Column(DateTime(timezone=True))
    progress = Column(Integer, nullable=False, default=0)
    created_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    is_archived = Column(Boolean, nullable=False, default=False)
    settings = Column(JSON, nullable=False, default=default_project_settings)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(_in("status", PROJECT_STATUSES), name="ck_projects_status"),
        CheckConstraint(_in("priority", PROJECT_PRIORITIES), name="ck_projects_priority"),
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_projects_progress"),
    )

    created_by = relationship("User")
    members = relationship("User", secondary=project_members)
    updates = relationship(
        "ProjectUpdate",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectUpdate.id",
    )


class ProjectUpdate(Base):
    __tablename__ = "ProjectUpdates"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("Projects.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False, default="general")
    title = Column(String, nullable=False)
    description = Column(Text)
    updated_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    priority = Column(String, nullable=False, default="medium")
    tags = Column(JSON, nullable=False, default=list)
    is_visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(_in("type", UPDATE_TYPES), name="ck_project_updates_type"),
        CheckConstraint(_in("priority", PROJECT_PRIORITIES), name="ck_project_updates_priority"),
    )

    project = relationship("Project", back_populates="updates")
    updated_by = relationship("User")


class Board(Base):
    __tablename__ = "Boards"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    # Owned-by-id without a foreign key: deleting a project leaves its boards behind.
    project_id = Column(Integer, nullable=False, index=True)
    type = Column(String, nullable=False, default="scrum")
    visibility = Column(String, nullable=False, default="public")
    configuration = Column(JSON, nullable=False, default=dict)
    statistics = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(_in("type", BOARD_TYPES), name="ck_boards_type"),
        CheckConstraint(_in("visibility", BOARD_VISIBILITIES), name="ck_boards_visibility"),
    )

    project = relationship("Project", primaryjoin="foreign(Board.project_id) == Project.id", viewonly=True)
    memberships = relationship("BoardMember", cascade="all, delete-orphan", lazy="selectin")

    def member_ids(self, role: str) -> set[int]:
        return {item.user_id for item in self.memberships if item.role == role}

    @property
    def administrators(self) -> set[int]:
        return self.member_ids("administrator")

    @property
    def permissions(self) -> dict[str, set[int]]:
        return {level: self.member_ids(level) for level in ("view", "edit", "admin")}

    def set_members(self, role: str, user_ids) -> None:
        wanted = set(user_ids)
        kept = [item for item in self.memberships if item.role != role or item.user_id in wanted]
        present = {item.user_id for item in kept if item.role == role}
        self.memberships = kept + [BoardMember(role=role, user_id=user_id) for user_id in sorted(wanted - present)]


class BoardMember(Base):
    """One entry of a board's administrators or view/edit/admin permission set."""

    __tablename__ = "BoardMembers"

    board_id = Column(Integer, ForeignKey("Boards.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("Users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(String, primary_key=True)

    __table_args__ = (CheckConstraint(_in("role", BOARD_ROLES), name="ck_board_members_role"),)


class BoardList(Base):
    __tablename__ = "Lists"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    # No foreign key: deleting a board leaves its lists behind.
    board_id = Column(Integer, nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    created_by = relationship("User")


class Card(Base):
    __tablename__ = "Cards"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    # No foreign key: deleting a list leaves its cards behind.
    list_id = Column(Integer, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    due_date = Column(DateTime(timezone=True))
    order = Column(Integer, nullable=False, default=0)
    assigned_to_id = Column(Integer, ForeignKey("Users.id", ondelete="SET NULL"))
    created_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    labels = Column(JSON, nullable=False, default=list)
    priority = Column(String, nullable=False, default="medium")
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(_in("priority", CARD_PRIORITIES), name="ck_cards_priority"),
        CheckConstraint(_in("status", CARD_STATUSES), name="ck_cards_status"),
    )

    assigned_to = relationship("User", foreign_keys=[assigned_to_id])
    created_by = relationship("User", foreign_keys=[created_by_id])
    attachments = relationship(
        "CardAttachment",
        back_populates="card",
        cascade="all, delete-orphan",
        order_by="CardAttachment.id",
    )


class CardAttachment(Base):
    __tablename__ = "CardAttachments"

    id = Column(Integer, primary_key=True)
    card_id = Column(Integer, ForeignKey("Cards.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    size = Column(Integer, nullable=False)
    mimetype = Column(String, nullable=False)
    url = Column(String, nullable=False)
    uploaded_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    card = relationship("Card", back_populates="attachments")
    uploaded_by = relationship("User")


class Team(Base):
    __tablename__ = "Teams"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_by_id = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    created_by = relationship("User")
    members = relationship("User", secondary=team_members)
