"""Repository layer for data access."""

from .base import BaseRepository
from .tag import TagRepository
from .todo import TodoRepository
from .todo_tag import TodoTagRepository

__all__ = [
    "BaseRepository",
    "TodoRepository",
    "TagRepository",
    "TodoTagRepository",
]
