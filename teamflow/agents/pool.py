"""Agent pool construction from team configuration."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ..config.team import AgentSpec, TeamConfig
from ..memory import BaseMemory, InMemoryMemory, SqliteMemory
from ..models.catalog import create_client
from ..tools import load_tools
from .runtime import Agent


IN_MEMORY = "in_memory"


def _build_memory(spec: AgentSpec, team: TeamConfig, shared: dict[str, BaseMemory]) -> BaseMemory:
    if team.shared_memory:
        key = team.shared_memory
    elif spec.memory:
        key = spec.memory
    else:
        key = str(team.memory_dir / f"memory_{spec.name}.db")

    # Agents pointing at the same store share one instance so its lock
    # serializes all of their writes.
    if key not in shared:
        shared[key] = InMemoryMemory() if key == IN_MEMORY else SqliteMemory(Path(key))
    return shared[key]


def build_agent_pool(
    team: TeamConfig,
    *,
    dry_run: bool = False,
    logger: logging.Logger | None = None,
) -> dict[str, Agent]:
    """Instantiate one ``Agent`` per spec, in declaration order."""
    log = logger or logging.getLogger(__name__)
    stores: dict[str, BaseMemory] = {}
    pool: dict[str, Agent] = {}

    for spec in team.agents:
        pool[spec.name] = Agent(
            name=spec.name,
            role=spec.role,
            instructions=spec.instructions,
            client=create_client(spec.model, dry_run=dry_run),
            tools=load_tools(spec.tools, logger=log),
            memory=_build_memory(spec, team, stores),
            logger=log,
        )
        log.debug("Agent '%s' ready (model=%s, tools=%s)", spec.name, spec.model or "default", spec.tools)

    return pool


async def close_pool(pool: dict[str, Agent]) -> None:
    """Close all model clients."""
    await asyncio.gather(*[agent.close() for agent in pool.values()])
