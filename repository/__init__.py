"""Repository module for reading and storing committed class slots."""

from .base import ExistingSlotRepository
from .memory import InMemorySlotRepository
from .sqlite_repository import SqliteSlotRepository

__all__ = ["ExistingSlotRepository", "InMemorySlotRepository", "SqliteSlotRepository"]
