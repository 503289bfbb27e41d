"""Process-local memory backend."""

from __future__ import annotations

import asyncio

from ..models.base import ChatMessage
from .base import BaseMemory


class InMemoryMemory(BaseMemory):
    """List-backed memory, lost when the process exits."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._lock = asyncio.Lock()

    async def store(self, role: str, content: str) -> None:
        async with self._lock:
            self._messages.append(ChatMessage(role=role, content=content))

    async def load(self) -> list[ChatMessage]:
        async with self._lock:
            return list(self._messages)

    async def recall(self, key: str) -> str | None:
        async with self._lock:
            for msg in reversed(self._messages):
                if key in msg.content:
                    return msg.content
        return None

    async def clear(self) -> None:
        async with self._lock:
            self._messages.clear()
