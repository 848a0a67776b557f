import logging

from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.db.models import Team, User
from kanban.db.schemas import TeamCreate

logger = logging.getLogger(__name__)


def create_team(db: Session, user: User, payload: TeamCreate) -> Team:
    if not payload.name:
        raise ValidationError("Team name is required")

    members = db.query(User).filter(User.id.in_(set(payload.members))).all() if payload.members else []
    team = Team(name=payload.name, members=members, created_by_id=user.id)
    db.add(team)
    db.commit()
    db.refresh(team)
    logger.info("User %s created team %s", user.id, team.id)
    return team


def list_teams(db: Session, user: User) -> list[Team]:
    return db.query(Team).filter(Team.created_by_id == user.id).order_by(Team.id).all()
