"""Tests for the workflow executor: step tracking, deadlines and status."""

from __future__ import annotations

import asyncio

import pytest

from teamflow.topologies import ChainOfThoughtTopology, ParallelTopology, RoundRobinTopology
from teamflow.workflow import WorkflowExecutor, WorkflowState


class EchoAgent:
    def __init__(self, name: str, delay: float = 0.0) -> None:
        self.name = name
        self.delay = delay

    async def invoke(self, prompt: str) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        return f"{self.name} saw {prompt}"


class ExplodingAgent:
    name = "bad"

    async def invoke(self, prompt: str) -> str:
        raise RuntimeError("boom")


def test_step_results_record_inputs_and_outputs() -> None:
    """Every invocation appends one StepResult with a running index."""

    async def _run():
        executor = WorkflowExecutor()
        pool = {"a": EchoAgent("a"), "b": EchoAgent("b")}
        return await executor.execute(ChainOfThoughtTopology(), pool, "go")

    outcome = asyncio.run(_run())
    steps = outcome.state.step_results

    assert [s.step_index for s in steps] == [1, 2]
    assert steps[0].input == "go"
    assert steps[0].output == "a saw go"
    assert steps[1].input == "a saw go"
    assert all(s.duration_ms >= 0 for s in steps)
    assert outcome.state.variables["topology"] == "chain_of_thought"
    assert outcome.state.variables["task"] == "go"


def test_invoke_timeout_becomes_diagnostic_output() -> None:
    """A hanging agent degrades its step instead of stalling the run."""

    async def _run():
        executor = WorkflowExecutor(invoke_timeout=0.05)
        pool = {"slow": EchoAgent("slow", delay=2.0), "fast": EchoAgent("fast")}
        return await executor.execute(RoundRobinTopology(), pool, "task")

    outcome = asyncio.run(_run())
    assert outcome.trace == [
        "slow: Agent 'slow' timed out after 0.05s",
        "fast: fast saw task",
    ]


def test_agent_exception_is_absorbed() -> None:
    async def _run():
        executor = WorkflowExecutor()
        pool = {"bad": ExplodingAgent(), "ok": EchoAgent("ok")}
        return await executor.execute(ParallelTopology(), pool, "task")

    outcome = asyncio.run(_run())
    assert outcome.trace == ["bad: Agent 'bad' failed: boom", "ok: ok saw task"]


def test_max_concurrent_bounds_in_flight_invocations() -> None:
    tracker = {"active": 0, "peak": 0}

    class CountingAgent:
        def __init__(self, name: str) -> None:
            self.name = name

        async def invoke(self, prompt: str) -> str:
            tracker["active"] += 1
            tracker["peak"] = max(tracker["peak"], tracker["active"])
            await asyncio.sleep(0.01)
            tracker["active"] -= 1
            return "done"

    async def _run():
        executor = WorkflowExecutor(max_concurrent=2)
        pool = {f"agent{i}": CountingAgent(f"agent{i}") for i in range(5)}
        return await executor.execute(ParallelTopology(), pool, "task")

    outcome = asyncio.run(_run())
    assert len(outcome.trace) == 5
    assert tracker["peak"] == 2


def test_max_concurrent_must_be_positive() -> None:
    with pytest.raises(ValueError):
        WorkflowExecutor(max_concurrent=0)


def test_status_snapshots_report_completion() -> None:
    async def _run():
        executor = WorkflowExecutor()
        pool = {"a": EchoAgent("a"), "b": EchoAgent("b")}
        outcome = await executor.execute(RoundRobinTopology(), pool, "task")
        return executor, outcome

    executor, outcome = asyncio.run(_run())
    statuses = executor.active_workflows()

    assert len(statuses) == 1
    status = statuses[0]
    assert status.workflow_id == outcome.state.workflow_id
    assert status.current_step == 2
    assert status.current_agent == "b"
    assert status.is_complete
    assert status.execution_time_seconds >= 0
    assert executor.get_state(status.workflow_id) is outcome.state

    assert executor.forget_completed() == 1
    assert executor.active_workflows() == []


def test_workflow_state_helpers() -> None:
    state = WorkflowState()
    assert not state.is_complete()
    state.set_variable("k", "v")
    state.set_metadata("owner", "ops")
    assert state.get_variable("k") == "v"
    assert state.get_variable("missing") is None
    assert state.get_metadata("owner") == "ops"

    state.mark_complete()
    assert state.is_complete()
    payload = state.to_dict()
    assert payload["variables"] == {"k": "v"}
    assert payload["step_results"] == []


def test_executor_reused_across_event_loops() -> None:
    """A bounded executor keeps working when each run gets a fresh loop."""
    executor = WorkflowExecutor(max_concurrent=1)
    pool = {"a": EchoAgent("a", delay=0.01), "b": EchoAgent("b", delay=0.01)}

    first = asyncio.run(executor.execute(ParallelTopology(), pool, "one"))
    second = asyncio.run(executor.execute(ParallelTopology(), pool, "two"))

    assert first.trace == ["a: a saw one", "b: b saw one"]
    assert second.trace == ["a: a saw two", "b: b saw two"]
