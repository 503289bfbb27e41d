"""Conversation memory backends."""

from .base import BaseMemory
from .in_memory import InMemoryMemory
from .sqlite import SqliteMemory

__all__ = ["BaseMemory", "InMemoryMemory", "SqliteMemory"]
