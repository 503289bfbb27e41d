"""Chain-of-thought topology: each agent refines the previous agent's output."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


@dataclass(slots=True)
class ChainOfThoughtTopology(BaseTopology):
    """Strictly sequential chain in pool order; the last output is the result."""

    name = "chain_of_thought"

    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        current_input = task
        trace: list[str] = []

        for idx, agent_name in enumerate(pool, start=1):
            logger.info("Chain: %s (step %d)", agent_name, idx)
            output = await invoke_agent(agent_name, current_input)
            trace.append(f"Step {idx} ({agent_name}): {output}")
            current_input = output

        return TopologyResult(trace=trace, result=current_input, metadata={"chain_length": len(trace)})
