import logging

from fastapi import UploadFile
from sqlalchemy.orm import Session

from kanban.core.errors import NotFound, ValidationError
from kanban.db.models import Card, CardAttachment, User
from kanban.db.schemas import CardCreate, CardMove, CardPatch
from kanban.services.access import require_contents_edit, require_view, resolve_card_board, resolve_list_board
from kanban.services.uploads import store_uploads

logger = logging.getLogger(__name__)

# Columns that reject NULL; an explicit null in a patch leaves them untouched.
_REQUIRED_FIELDS = {"title", "priority", "status", "labels"}


def create_card(db: Session, user: User, list_id: int, payload: CardCreate) -> Card:
    if not payload.title:
        raise ValidationError("Title and listId are required")

    board_list, board = resolve_list_board(db, list_id)
    require_contents_edit(board, user.id)

    order = db.query(Card).filter(Card.list_id == board_list.id).count()
    card = Card(
        title=payload.title,
        description=payload.description or "",
        due_date=payload.due_date,
        list_id=board_list.id,
        assigned_to_id=payload.assigned_to_id,
        priority=payload.priority or "medium",
        created_by_id=user.id,
        order=order,
    )
    db.add(card)
    db.commit()
    db.refresh(card)
    logger.info("User %s created card %s in list %s", user.id, card.id, board_list.id)
    return card


def list_cards(db: Session, user: User, list_id: int) -> list[Card]:
    board_list, board = resolve_list_board(db, list_id)
    require_view(board, user.id)
    return (
        db.query(Card)
        .filter(Card.list_id == board_list.id)
        .order_by(Card.order.asc(), Card.id.asc())
        .all()
    )


def update_card(db: Session, user: User, card_id: int, payload: CardPatch) -> Card:
    card, board = resolve_card_board(db, card_id)
    require_contents_edit(board, user.id)

    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        if value is None and key == "description":
            value = ""
        setattr(card, key, value)

    db.commit()
    db.refresh(card)
    return card


def move_card(db: Session, user: User, card_id: int, payload: CardMove) -> Card:
    card = db.get(Card, card_id)
    if not card:
        raise NotFound("Card not found")

    # Only the destination board is checked; the source board is never consulted.
    new_list, board = resolve_list_board(db, payload.new_list_id, missing_list="New list not found")
    require_contents_edit(board, user.id)

    card.list_id = new_list.id
    if payload.new_order is not None:
        card.order = payload.new_order

    db.commit()
    db.refresh(card)
    logger.info("User %s moved card %s to list %s", user.id, card.id, new_list.id)
    return card


def delete_card(db: Session, user: User, card_id: int) -> None:
    card, board = resolve_card_board(db, card_id)
    require_contents_edit(board, user.id)

    db.delete(card)
    db.commit()
    logger.info("User %s deleted card %s", user.id, card_id)


def add_attachments(db: Session, user: User, card_id: int, files: list[UploadFile]) -> tuple[list[CardAttachment], Card]:
    card, board = resolve_card_board(db, card_id)
    require_contents_edit(board, user.id)
    if not files:
        raise ValidationError("No file uploaded")

    added = [CardAttachment(uploaded_by_id=user.id, **stored) for stored in store_uploads(files)]
    card.attachments.extend(added)
    db.commit()
    for attachment in added:
        db.refresh(attachment)
    db.refresh(card)
    return added, card


def delete_attachment(db: Session, user: User, card_id: int, attachment_id: int) -> Card:
    card, board = resolve_card_board(db, card_id)
    require_contents_edit(board, user.id)

    index = next((i for i, item in enumerate(card.attachments) if item.id == attachment_id), -1)
    if index == -1:
        raise NotFound("Attachment not found")

    card.attachments.pop(index)
    db.commit()
    db.refresh(card)
    return card
