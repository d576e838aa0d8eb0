"""Board and card view state for the task board client.

``BoardState`` is the grouped projection of the caller's cards. It is owned
by a ``BoardController`` which reloads it wholesale from the API after every
mutation. ``CardView`` is the per-card edit form.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from taskboard.client.api import TaskBoardClient

logger = logging.getLogger(__name__)

BOARD_COLUMNS = ("todo", "inProgress", "done")

TITLE_LIMIT = 50
DESCRIPTION_LIMIT = 200
ASSIGNEE_LIMIT = 30

# Display truncation on the card face
DISPLAY_TITLE_LIMIT = 30
DISPLAY_ASSIGNEE_LIMIT = 20

FIELD_LIMITS = {
    "title": TITLE_LIMIT,
    "description": DESCRIPTION_LIMIT,
    "assignee": ASSIGNEE_LIMIT,
}

Card = Dict[str, Any]


def group_cards(cards: List[Card]) -> Dict[str, List[Card]]:
    """Split cards by column. Cards outside the three columns are dropped."""
    return {
        column: [c for c in cards if c.get("boardId") == column]
        for column in BOARD_COLUMNS
    }


def matches_search(card: Card, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    title = (card.get("title") or "").lower()
    description = (card.get("description") or "").lower()
    return needle in title or needle in description


def truncate_text(text: Optional[str], limit: int) -> str:
    if not text:
        return ""
    return f"{text[:limit]}..." if len(text) > limit else text


def format_due_date(value: Optional[str]) -> str:
    if not value:
        return ""
    return date.fromisoformat(value[:10]).strftime("%m/%d/%Y")


class BoardState:
    def __init__(self):
        self.columns: Dict[str, List[Card]] = {column: [] for column in BOARD_COLUMNS}
        self.search_term = ""

    def replace(self, cards: List[Card]):
        self.columns = group_cards(cards)

    def find(self, card_id) -> Tuple[Optional[str], Optional[Card]]:
        for column, cards in self.columns.items():
            for card in cards:
                if card["id"] == card_id:
                    return column, card
        return None, None

    def visible(self, column: str) -> List[Card]:
        """Cards of ``column`` that pass the current search term."""
        return [c for c in self.columns.get(column, []) if matches_search(c, self.search_term)]

    def count(self, column: str) -> int:
        return len(self.visible(column))

    def relocate(self, card_id, target: str):
        source, card = self.find(card_id)
        if card is None:
            return
        self.columns[source] = [c for c in self.columns[source] if c["id"] != card_id]
        self.columns.setdefault(target, []).append({**card, "boardId": target})


class BoardController:
    def __init__(self, client: TaskBoardClient, state: Optional[BoardState] = None):
        self.client = client
        self.state = state or BoardState()

    async def refresh(self) -> BoardState:
        cards = await self.client.list_cards()
        self.state.replace(cards)
        return self.state

    def search(self, term: str):
        self.state.search_term = term

    async def add_card(self, board_id: str, data: Card) -> Card:
        """Create a card in ``board_id`` (the column the add form was opened from)."""
        payload = {"priority": "Medium", **data, "boardId": board_id}
        created = await self.client.create_card(payload)
        await self.refresh()
        return created

    async def update_card(self, card: Card) -> Card:
        updated = await self.client.update_card(card)
        await self.refresh()
        return updated

    async def delete_card(self, card_id):
        await self.client.delete_card(card_id)
        await self.refresh()

    async def move_card(self, card_id, source: str, target: str) -> Optional[Card]:
        """Handle a drop of ``card_id`` onto ``target``.

        Dropping on the source column is a no-op. Otherwise the card moves
        locally right away and the full card is PUT with the new boardId;
        the board is reloaded either way.
        """
        if source == target:
            return None
        _, card = self.state.find(card_id)
        if card is None:
            logger.warning(f"Dropped card {card_id} is not on the board")
            return None

        self.state.relocate(card_id, target)
        try:
            moved = await self.client.update_card({**card, "boardId": target})
        except Exception:
            # Reconcile the local move, but report the update failure
            try:
                await self.refresh()
            except Exception:
                logger.error(f"Reload after failed move of card {card_id} failed", exc_info=True)
            raise

        await self.refresh()
        return moved


class CardView:
    DISPLAY = "display"
    EDIT = "edit"

    def __init__(self, card: Card, controller: BoardController):
        self.card = card
        self.controller = controller
        self.mode = self.DISPLAY
        self.draft: Optional[Card] = None

    def start_edit(self):
        self.draft = {
            **self.card,
            "description": self.card.get("description") or "",
            "assignee": self.card.get("assignee") or "",
            "priority": self.card.get("priority") or "Medium",
        }
        self.mode = self.EDIT

    def set_field(self, field: str, value):
        if self.draft is None:
            raise RuntimeError("Card is not being edited")
        if field == "dueDate" and not value:
            value = None
        limit = FIELD_LIMITS.get(field)
        if limit is not None and value is not None:
            value = value[:limit]
        self.draft[field] = value

    def at_limit(self, field: str) -> bool:
        value = (self.draft or self.card).get(field) or ""
        return len(value) == FIELD_LIMITS[field]

    async def submit(self) -> Card:
        if self.draft is None:
            raise RuntimeError("Card is not being edited")
        updated = await self.controller.update_card(self.draft)
        self.card = updated
        self.draft = None
        self.mode = self.DISPLAY
        return updated

    def cancel(self):
        self.draft = None
        self.mode = self.DISPLAY

    def display(self) -> Dict[str, str]:
        """Text shown on the card face in display mode."""
        return {
            "title": truncate_text(self.card.get("title"), DISPLAY_TITLE_LIMIT),
            "description": self.card.get("description") or "",
            "dueDate": format_due_date(self.card.get("dueDate")),
            "assignee": truncate_text(self.card.get("assignee"), DISPLAY_ASSIGNEE_LIMIT),
            "priority": self.card.get("priority") or "Medium",
        }
