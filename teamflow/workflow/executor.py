"""Workflow dispatch engine."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import time

from ..topologies import AgentPool, Topology
from ..topologies.base import SupportsInvoke
from .state import StepResult, WorkflowState, WorkflowStatus


@dataclass(slots=True)
class WorkflowResult:
    """Trace, terminal value and final state of one run."""

    trace: list[str]
    result: str
    state: WorkflowState


class WorkflowExecutor:
    """Runs a topology over an agent pool and tracks active runs.

    ``invoke_timeout`` bounds each agent invocation; an expired deadline
    becomes the step's output instead of an error. ``max_concurrent`` caps
    in-flight invocations across every run on this executor within one event
    loop.
    """

    def __init__(
        self,
        *,
        invoke_timeout: float | None = None,
        max_concurrent: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_concurrent is not None and max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.invoke_timeout = invoke_timeout
        self.max_concurrent = max_concurrent
        self.logger = logger or logging.getLogger(__name__)
        self._semaphore: asyncio.Semaphore | None = None
        self._semaphore_loop: asyncio.AbstractEventLoop | None = None
        self._runs: dict[str, WorkflowState] = {}

    async def execute(self, topology: Topology, pool: AgentPool, task: str) -> WorkflowResult:
        """Run ``task`` through ``topology`` and return the joined trace and result."""
        state = WorkflowState()
        state.set_variable("topology", topology.name)
        state.set_variable("task", task)
        self._runs[state.workflow_id] = state

        self.logger.info(
            "Executing %s workflow %s with %d agents",
            topology.name,
            state.workflow_id,
            len(pool),
        )

        async def invoke_agent(agent_name: str, prompt: str) -> str:
            return await self._invoke(state, pool, agent_name, prompt)

        try:
            outcome = await topology.execute(
                task=task,
                pool=pool,
                invoke_agent=invoke_agent,
                state=state,
                logger=self.logger,
            )
        finally:
            state.mark_complete()

        self.logger.info(
            "Workflow %s finished: %d steps in %.2fs",
            state.workflow_id,
            len(state.step_results),
            state.execution_time_seconds(),
        )
        return WorkflowResult(trace=outcome.trace, result=outcome.result, state=state)

    async def _invoke(self, state: WorkflowState, pool: AgentPool, agent_name: str, prompt: str) -> str:
        agent = pool.get(agent_name)
        if agent is None:
            return f"Agent '{agent_name}' not found"

        state.current_step += 1
        step_index = state.current_step
        state.current_agent = agent_name

        started = time.perf_counter()
        timestamp = time.time()
        semaphore = self._limiter()
        if semaphore is not None:
            async with semaphore:
                output = await self._call_agent(agent, agent_name, prompt)
        else:
            output = await self._call_agent(agent, agent_name, prompt)
        duration_ms = (time.perf_counter() - started) * 1000

        state.add_step_result(
            StepResult(
                step_index=step_index,
                agent=agent_name,
                input=prompt,
                output=output,
                timestamp=timestamp,
                duration_ms=duration_ms,
            )
        )
        self.logger.debug("Step %d (%s) done in %.1fms", step_index, agent_name, duration_ms)
        return output

    def _limiter(self) -> asyncio.Semaphore | None:
        if self.max_concurrent is None:
            return None
        # Semaphores bind to one event loop; rebuild when reused under a new one.
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
            self._semaphore_loop = loop
        return self._semaphore

    async def _call_agent(self, agent: SupportsInvoke, agent_name: str, prompt: str) -> str:
        try:
            if self.invoke_timeout is None:
                return await agent.invoke(prompt)
            return await asyncio.wait_for(agent.invoke(prompt), timeout=self.invoke_timeout)
        except asyncio.TimeoutError:
            self.logger.warning("Agent '%s' timed out after %ss", agent_name, self.invoke_timeout)
            return f"Agent '{agent_name}' timed out after {self.invoke_timeout}s"
        except Exception as exc:
            self.logger.warning("Agent '%s' raised: %s", agent_name, exc)
            return f"Agent '{agent_name}' failed: {exc}"

    def active_workflows(self) -> list[WorkflowStatus]:
        """Status snapshots for every run registered on this executor."""
        return [state.status() for state in self._runs.values()]

    def get_state(self, workflow_id: str) -> WorkflowState | None:
        return self._runs.get(workflow_id)

    def forget_completed(self) -> int:
        """Drop finished runs; returns how many were removed."""
        finished = [wid for wid, state in self._runs.items() if state.is_complete()]
        for wid in finished:
            del self._runs[wid]
        return len(finished)
