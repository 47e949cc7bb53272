"""API layer - FastAPI endpoints."""

from .tags import router as tags_router
from .todos import router as todos_router

__all__ = [
    "todos_router",
    "tags_router",
]
