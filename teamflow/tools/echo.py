"""Echo tool, mostly useful for wiring checks."""

from __future__ import annotations

from .base import BaseTool


class EchoTool(BaseTool):
    name = "echo"
    description = "Repeats its argument back."

    async def call(self, args: str) -> str:
        return f"Echo: {args}"
