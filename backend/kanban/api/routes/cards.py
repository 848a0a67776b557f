from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from kanban.core.deps import get_current_user
from kanban.db.models import User
from kanban.db.schemas import (
    AttachmentDeleted,
    AttachmentUploaded,
    CardCreate,
    CardMove,
    CardOut,
    CardPatch,
    MessageOut,
)
from kanban.db.session import get_db
from kanban.services import cards


router = APIRouter(prefix="/cards", tags=["cards"])


@router.post("/list/{list_id}", response_model=CardOut, status_code=status.HTTP_201_CREATED)
def create_card(
    list_id: int,
    payload: CardCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cards.create_card(db, current_user, list_id, payload)


@router.get("/list/{list_id}", response_model=list[CardOut])
def list_cards(
    list_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cards.list_cards(db, current_user, list_id)


@router.put("/{card_id}", response_model=CardOut)
def update_card(
    card_id: int,
    payload: CardPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cards.update_card(db, current_user, card_id, payload)


@router.put("/{card_id}/move", response_model=CardOut)
def move_card(
    card_id: int,
    payload: CardMove,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cards.move_card(db, current_user, card_id, payload)


@router.post("/{card_id}/attachment", response_model=AttachmentUploaded)
def upload_attachment(
    card_id: int,
    file: list[UploadFile] | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    added, card = cards.add_attachments(db, current_user, card_id, file or [])
    return {
        "message": "File uploaded successfully",
        "attachment": added[0],
        "attachments": added,
        "card": card,
    }


@router.delete("/{card_id}/attachment/{attachment_id}", response_model=AttachmentDeleted)
def delete_attachment(
    card_id: int,
    attachment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    card = cards.delete_attachment(db, current_user, card_id, attachment_id)
    return {"message": "Attachment deleted successfully", "card": card}


@router.delete("/{card_id}", response_model=MessageOut)
def delete_card(
    card_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    cards.delete_card(db, current_user, card_id)
    return {"message": "Card deleted successfully"}
