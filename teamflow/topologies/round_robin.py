"""Round-robin topology: every agent takes one turn on the original task."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult, join_trace

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


@dataclass(slots=True)
class RoundRobinTopology(BaseTopology):
    """Sequential turns in pool order, each agent seeing the unmodified task."""

    name = "round_robin"

    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        trace: list[str] = []
        for agent_name in pool:
            logger.info("Round-robin: %s taking turn", agent_name)
            output = await invoke_agent(agent_name, task)
            trace.append(f"{agent_name}: {output}")

        return TopologyResult(trace=trace, result=join_trace(trace), metadata={"turns": len(trace)})
