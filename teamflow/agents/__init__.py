"""Agent runtime and pool construction."""

from .pool import build_agent_pool, close_pool
from .runtime import TOOL_PROTOCOL, Agent, ToolCall, parse_tool_call

__all__ = [
    "Agent",
    "ToolCall",
    "TOOL_PROTOCOL",
    "parse_tool_call",
    "build_agent_pool",
    "close_pool",
]
