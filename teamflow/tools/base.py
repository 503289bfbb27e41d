"""Tool abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseTool(ABC):
    """A named callable an agent can request via a ``tool_call`` reply.

    ``call`` takes the raw argument string from the model and must return a
    string; failures are reported in the returned text, not raised.
    """

    name: str
    description: str = ""

    @abstractmethod
    async def call(self, args: str) -> str:
        """Run the tool."""
