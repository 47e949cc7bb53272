"""Core application components."""

from .config import Settings, settings
from .database import Database, database

__all__ = [
    "settings",
    "Settings",
    "Database",
    "database",
]
