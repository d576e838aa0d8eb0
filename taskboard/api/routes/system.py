from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.security import CurrentUser, get_current_user
from taskboard.db import crud
from taskboard.db.session import get_db
from taskboard.schemas.system import CardStats

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/stats", response_model=CardStats)
async def get_stats(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return the caller's card counts per column."""
    counts = await crud.count_cards_by_board(db, owner_id=user.id)
    return CardStats(
        todo=counts.get("todo", 0),
        in_progress=counts.get("inProgress", 0),
        done=counts.get("done", 0),
        total=sum(counts.values()),
    )
