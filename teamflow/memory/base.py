"""Conversation memory abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.base import ChatMessage


class BaseMemory(ABC):
    """Append-only conversation log with point lookup.

    Implementations serialize their own writes; callers may share one
    instance between agents.
    """

    @abstractmethod
    async def store(self, role: str, content: str) -> None:
        """Append one message."""

    @abstractmethod
    async def load(self) -> list[ChatMessage]:
        """Return the full history, oldest first."""

    @abstractmethod
    async def recall(self, key: str) -> str | None:
        """Return the most recent content containing ``key``."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop all stored messages."""
