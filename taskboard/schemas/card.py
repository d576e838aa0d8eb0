from datetime import date, datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

Priority = Literal["Low", "Medium", "High"]


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


class CardCreate(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    board_id: str
    priority: Priority = "Medium"

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return _require_text(v, "title")

    @field_validator("board_id")
    @classmethod
    def board_id_not_blank(cls, v):
        return _require_text(v, "boardId")


class CardUpdate(BaseModel):
    """Replacement payload for ``PUT /api/cards/{id}``.

    Only the fields declared here can ever change through an update.
    Anything else the caller sends (priority, ownerId, timestamps) is
    dropped on parsing.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    board_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return _require_text(v, "title")

    @field_validator("board_id")
    @classmethod
    def board_id_not_blank(cls, v):
        return _require_text(v, "boardId")


class CardRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    board_id: str
    priority: str = "Medium"
    owner_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Card deleted"])
