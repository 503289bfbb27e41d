"""Agent tools and the name-based tool loader."""

from __future__ import annotations

import logging

from .base import BaseTool
from .echo import EchoTool
from .math_tool import MathTool
from .search import SearchTool

BUILTIN_TOOLS: dict[str, type[BaseTool]] = {
    EchoTool.name: EchoTool,
    MathTool.name: MathTool,
    SearchTool.name: SearchTool,
}


def load_tools(names: list[str], logger: logging.Logger | None = None) -> list[BaseTool]:
    """Instantiate built-in tools by name, skipping unknown names."""
    log = logger or logging.getLogger(__name__)
    tools: list[BaseTool] = []
    for name in names:
        tool_cls = BUILTIN_TOOLS.get(name)
        if tool_cls is None:
            log.warning("Unknown tool '%s', skipping", name)
            continue
        tools.append(tool_cls())
    return tools


__all__ = [
    "BaseTool",
    "EchoTool",
    "MathTool",
    "SearchTool",
    "BUILTIN_TOOLS",
    "load_tools",
]
