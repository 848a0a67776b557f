import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kanban.core.errors import Conflict, NotAuthenticated, NotFound, ValidationError
from kanban.core.security import create_access_token, hash_password, verify_password
from kanban.db.models import User, utcnow
from kanban.db.schemas import PermissionGrant, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: \w+\.(\w+)")
_POSTGRES_KEY = re.compile(r"Key \((\w+)\)=")

# Profile columns that reject NULL; an explicit null leaves them untouched.
_REQUIRED_PROFILE_FIELDS = {"avatar", "timezone", "language"}


def duplicate_field(exc: IntegrityError) -> str | None:
    """Name of the unique column a duplicate-key error points at, if recognisable."""
    message = str(exc.orig)
    for pattern in (_SQLITE_UNIQUE, _POSTGRES_KEY):
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


def _commit_unique(db: Session, user: User) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        field = duplicate_field(exc)
        if not field:
            raise
        logger.warning("Duplicate %s for user %s", field, user.email)
        raise Conflict(f"{field.capitalize()} already exists", field=field) from exc


def register(db: Session, payload: RegisterRequest) -> tuple[User, str]:
    if not payload.name or not payload.email or not payload.password:
        raise ValidationError("Name, email, and password are required")

    if db.query(User.id).filter(User.email == payload.email).first():
        raise Conflict("User with this email already exists", field="email")
    if payload.username and db.query(User.id).filter(User.username == payload.username).first():
        raise Conflict("Username is already taken", field="username")

    user = User(
        name=payload.name,
        username=payload.username or None,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    _commit_unique(db, user)
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user, create_access_token(subject=str(user.id))


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        raise NotAuthenticated("Invalid credentials")

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)
    return user, create_access_token(subject=str(user.id))


def update_profile(db: Session, user: User, payload: ProfileUpdate) -> User:
    changes = payload.model_dump(exclude_unset=True)
    preferences = changes.pop("preferences", None)
    if not changes.get("name"):
        changes.pop("name", None)
    for key, value in changes.items():
        if value is None and key in _REQUIRED_PROFILE_FIELDS:
            continue
        setattr(user, key, value)
    if preferences is not None:
        user.preferences = {**(user.preferences or {}), **preferences}

    _commit_unique(db, user)
    db.refresh(user)
    return user


def set_permissions(db: Session, user_id: int, grants: list[PermissionGrant]) -> User:
    target = db.get(User, user_id)
    if not target:
        raise NotFound("User not found")

    target.permissions = [grant.model_dump() for grant in grants]
    db.commit()
    db.refresh(target)
    logger.info("Replaced permission grants for user %s", target.id)
    return target


def list_users(db: Session) -> list[User]:
    return db.query(User).filter(User.is_active.is_(True)).order_by(User.name.asc()).all()
