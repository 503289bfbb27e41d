"""Parallel topology: all agents run on the same task at once."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult, join_trace

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


@dataclass(slots=True)
class ParallelTopology(BaseTopology):
    """Concurrent fan-out; the trace is reported in pool order."""

    name = "parallel"

    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        agent_names = list(pool)
        logger.info("Parallel: dispatching %d agents", len(agent_names))

        outputs = await asyncio.gather(*[invoke_agent(name, task) for name in agent_names])

        trace = [f"{name}: {output}" for name, output in zip(agent_names, outputs)]
        return TopologyResult(trace=trace, result=join_trace(trace), metadata={"fan_out": len(trace)})
