"""Topology abstraction for orchestrating multi-agent execution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Protocol

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


class SupportsInvoke(Protocol):
    """Anything the executor can dispatch a prompt to."""

    name: str

    async def invoke(self, prompt: str) -> str: ...


AgentPool = Mapping[str, SupportsInvoke]

# (agent_name, prompt) -> output. Supplied by the executor; records the step
# and never raises.
AgentInvoker = Callable[[str, str], Awaitable[str]]


@dataclass(slots=True)
class TopologyResult:
    """Trace and terminal value of one topology run."""

    trace: list[str]
    result: str
    metadata: dict[str, Any] = field(default_factory=dict)


def join_trace(trace: list[str]) -> str:
    return "\n\n".join(trace)


class BaseTopology(ABC):
    """Abstract topology strategy."""

    name: str

    @abstractmethod
    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        """Drive the agents in ``pool`` over ``task`` until completion."""
