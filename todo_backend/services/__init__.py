"""Service layer with business logic."""

from .association import AssociationService
from .seed import seed_default_data
from .tag import TagService
from .tag_extraction import extract_tags
from .todo import TodoService

__all__ = [
    "AssociationService",
    "TodoService",
    "TagService",
    "extract_tags",
    "seed_default_data",
]
