import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import NotFoundError, UnexpectedError
from taskboard.core.security import CurrentUser, get_current_user
from taskboard.db import crud
from taskboard.db.session import get_db
from taskboard.schemas.card import CardCreate, CardRead, CardUpdate, MessageResponse

logger = logging.getLogger(__name__)

CARDS_PREFIX = "/api/cards"

# The bearer check itself runs in the HTTP middleware in main.py
router = APIRouter(prefix=CARDS_PREFIX, tags=["cards"])


@router.get("", response_model=List[CardRead])
async def list_cards(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's cards. Grouping and search happen client-side."""
    try:
        cards = await crud.list_cards(db, owner_id=user.id)
    except SQLAlchemyError as e:
        logger.error("Listing cards failed:", exc_info=True)
        raise UnexpectedError(str(e))

    logger.info(f"Found {len(cards)} cards for user {user.id}")
    return cards


@router.post("", response_model=CardRead, status_code=status.HTTP_201_CREATED)
async def create_card(
    card: CardCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        new_card = await crud.create_card(db, card, owner_id=user.id)
    except SQLAlchemyError as e:
        logger.error("Card creation failed:", exc_info=True)
        raise UnexpectedError(str(e))

    logger.info(f"Created card {new_card.id} in '{new_card.board_id}'")
    return new_card


@router.put("/{card_id}", response_model=CardRead)
async def update_card(
    card_id: int,
    card: CardUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Overwrite title, description, dueDate, assignee and boardId.

    A drag between columns arrives here as a full update carrying the new
    ``boardId``. Other fields in the body are ignored.
    """
    logger.info(f"Updating card with ID: {card_id}")
    try:
        updated = await crud.update_card(db, card_id, card, owner_id=user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error updating card {card_id}:", exc_info=True)
        raise UnexpectedError(str(e))

    if not updated:
        logger.info(f"Card {card_id} not found")
        raise NotFoundError("Card not found")

    return updated


@router.delete("/{card_id}", response_model=MessageResponse)
async def delete_card(
    card_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        deleted = await crud.delete_card(db, card_id, owner_id=user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting card {card_id}:", exc_info=True)
        raise UnexpectedError(str(e))

    if not deleted:
        raise NotFoundError("Card not found")

    return {"message": "Card deleted"}
