"""Single-agent runtime: one model turn with optional tool execution."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import json
import logging
from typing import Any

from ..memory.base import BaseMemory
from ..models.base import BaseModelClient
from ..tools.base import BaseTool
from ..utils.rate_limiter import retry_with_backoff


TOOL_PROTOCOL = (
    "You are a helpful assistant.\n"
    "If you want to use a tool, respond ONLY in JSON format:\n"
    '{ "tool_call": { "name": "TOOL_NAME", "args": "ARGUMENT_STRING" } }\n'
    "Otherwise, reply normally as a helpful assistant."
)


@dataclass(slots=True)
class ToolCall:
    """Tool request parsed from a model reply."""

    name: str
    args: str


def parse_tool_call(response: str) -> ToolCall | None:
    """Return the tool call if the whole reply is a ``tool_call`` JSON object."""
    try:
        payload: Any = json.loads(response.strip())
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    call = payload.get("tool_call")
    if not isinstance(call, dict) or not isinstance(call.get("name"), str):
        return None

    args = call.get("args", "")
    if not isinstance(args, str):
        args = json.dumps(args)
    return ToolCall(name=call["name"], args=args)


class Agent:
    """Named agent wrapping a model client, a tool set and a memory store.

    ``invoke`` is fail-soft: whatever goes wrong inside the turn is returned
    as a diagnostic string so a workflow never aborts on one agent.
    """

    def __init__(
        self,
        name: str,
        instructions: str,
        client: BaseModelClient,
        tools: list[BaseTool],
        memory: BaseMemory,
        *,
        role: str = "",
        temperature: float = 0.7,
        max_tokens: int = 1024,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self.name = name
        self.role = role
        self.instructions = f"{TOOL_PROTOCOL}\n{instructions}".rstrip()
        self.client = client
        self.tools = {tool.name: tool for tool in tools}
        self.memory = memory
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()

    async def invoke(self, prompt: str) -> str:
        """Run one full turn and return plain text."""
        async with self._lock:
            try:
                return await self._turn(prompt)
            except Exception as exc:
                self.logger.warning("Agent '%s' failed: %s", self.name, exc)
                return f"Agent '{self.name}' failed: {exc}"

    async def _turn(self, prompt: str) -> str:
        history = await self.memory.load()

        response = await retry_with_backoff(
            lambda: self.client.generate(
                system_prompt=self.instructions,
                user_prompt=prompt,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                history=history,
                metadata={"agent": self.name},
            ),
            max_retries=self.max_retries,
            base_delay=self.retry_base_delay,
            logger=self.logger,
        )
        reply = response.text

        await self.memory.store("user", prompt)
        await self.memory.store("assistant", reply)

        call = parse_tool_call(reply)
        if call is None:
            return reply

        self.logger.info("Agent '%s' calling tool %s(%s)", self.name, call.name, call.args)
        return await self._run_tool(call)

    async def _run_tool(self, call: ToolCall) -> str:
        tool = self.tools.get(call.name)
        if tool is None:
            message = f"Unknown tool: {call.name}"
            await self.memory.store("assistant", message)
            return message

        output = await tool.call(call.args)
        await self.memory.store("tool", f"{tool.name} -> {output}")
        return output

    async def close(self) -> None:
        await self.client.close()
