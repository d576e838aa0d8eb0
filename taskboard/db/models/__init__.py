from taskboard.db.models.user import User
from taskboard.db.models.card import Card

__all__ = ["User", "Card"]
