"""SQLAlchemy models for the todo backend."""

from .base import Base
from .tag import Tag
from .todo import Todo
from .todo_tag import todo_tags

__all__ = [
    "Base",
    "Todo",
    "Tag",
    "todo_tags",
]
