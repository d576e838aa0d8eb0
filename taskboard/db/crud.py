"""Card data access, always scoped to the owning user."""

from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import Card, User
from taskboard.schemas.card import CardCreate, CardUpdate

# Fields an update may touch. priority and owner_id are deliberately absent.
UPDATABLE_FIELDS = frozenset({"title", "description", "due_date", "assignee", "board_id"})


async def list_cards(db: AsyncSession, owner_id: int) -> List[Card]:
    result = await db.execute(
        select(Card).where(Card.owner_id == owner_id).order_by(Card.id)
    )
    return list(result.scalars().all())


async def get_card(db: AsyncSession, card_id: int, owner_id: int) -> Optional[Card]:
    result = await db.execute(
        select(Card).where(Card.id == card_id, Card.owner_id == owner_id)
    )
    return result.scalar_one_or_none()


async def create_card(db: AsyncSession, data: CardCreate, owner_id: int) -> Card:
    card = Card(**data.model_dump(), owner_id=owner_id)
    db.add(card)
    await db.commit()
    await db.refresh(card)
    return card


async def update_card(
    db: AsyncSession, card_id: int, data: CardUpdate, owner_id: int
) -> Optional[Card]:
    """Apply the allowed subset of ``data``; returns None if the card is missing."""
    card = await get_card(db, card_id, owner_id)
    if not card:
        return None

    changes = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if k in UPDATABLE_FIELDS
    }
    for field, value in changes.items():
        setattr(card, field, value)

    await db.commit()
    await db.refresh(card)
    return card


async def delete_card(db: AsyncSession, card_id: int, owner_id: int) -> bool:
    card = await get_card(db, card_id, owner_id)
    if not card:
        return False

    await db.delete(card)
    await db.commit()
    return True


async def count_cards_by_board(db: AsyncSession, owner_id: int) -> dict:
    result = await db.execute(
        select(Card.board_id, func.count(Card.id))
        .where(Card.owner_id == owner_id)
        .group_by(Card.board_id)
    )
    return {board_id: count for board_id, count in result.all()}


# --- Users --- #


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def user_exists(db: AsyncSession, username: str, email: str) -> bool:
    result = await db.execute(
        select(User.id).where((User.username == username) | (User.email == email))
    )
    return result.first() is not None


async def create_user(
    db: AsyncSession, full_name: str, username: str, email: str, password_hash: str
) -> User:
    user = User(
        full_name=full_name,
        username=username,
        email=email,
        password_hash=password_hash,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
