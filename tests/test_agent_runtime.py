"""Tests for the single-agent runtime."""

from __future__ import annotations

import asyncio

from teamflow.agents import Agent, parse_tool_call
from teamflow.memory import InMemoryMemory
from teamflow.models.base import BaseModelClient, ModelResponse
from teamflow.tools import EchoTool, MathTool


class ScriptedClient(BaseModelClient):
    """Mock model client replaying canned replies (or raising canned errors)."""

    def __init__(self, replies: list) -> None:
        super().__init__(model_alias="scripted", api_model="scripted", dry_run=True)
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def generate(self, *, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int, history=None, metadata=None):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "history": list(history or []),
            }
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return ModelResponse(
            text=reply,
            model_name=self.model_alias,
            input_tokens=10,
            output_tokens=10,
            latency_ms=1.0,
            raw={},
        )


def _agent(replies: list, **kwargs) -> Agent:
    return Agent(
        name="helper",
        instructions="Be brief.",
        client=ScriptedClient(replies),
        tools=[EchoTool(), MathTool()],
        memory=InMemoryMemory(),
        retry_base_delay=0.0,
        **kwargs,
    )


def test_plain_reply_is_returned_and_remembered() -> None:
    async def _run():
        agent = _agent(["Hello there"])
        output = await agent.invoke("hi")
        return agent, output, await agent.memory.load()

    agent, output, history = asyncio.run(_run())
    assert output == "Hello there"
    assert [(m.role, m.content) for m in history] == [("user", "hi"), ("assistant", "Hello there")]
    assert agent.client.calls[0]["system_prompt"].endswith("Be brief.")
    assert "tool_call" in agent.client.calls[0]["system_prompt"]


def test_history_is_sent_on_later_turns() -> None:
    async def _run():
        agent = _agent(["first", "second"])
        await agent.invoke("one")
        await agent.invoke("two")
        return agent

    agent = asyncio.run(_run())
    assert agent.client.calls[0]["history"] == []
    assert [m.content for m in agent.client.calls[1]["history"]] == ["one", "first"]


def test_tool_call_runs_the_tool() -> None:
    async def _run():
        agent = _agent(['{"tool_call": {"name": "math", "args": "2 * (3 + 4)"}}'])
        output = await agent.invoke("compute")
        return output, await agent.memory.load()

    output, history = asyncio.run(_run())
    assert output == "Result: 14"
    assert history[-1].role == "tool"
    assert history[-1].content == "math -> Result: 14"


def test_unknown_tool_is_reported_as_text() -> None:
    async def _run():
        agent = _agent(['{"tool_call": {"name": "teleport", "args": "mars"}}'])
        return await agent.invoke("go")

    assert asyncio.run(_run()) == "Unknown tool: teleport"


def test_model_failure_is_fail_soft() -> None:
    """invoke returns a diagnostic instead of raising."""

    async def _run():
        agent = _agent([ConnectionError("endpoint unreachable")], max_retries=0)
        return await agent.invoke("hello")

    assert asyncio.run(_run()) == "Agent 'helper' failed: endpoint unreachable"


def test_transient_failures_are_retried() -> None:
    async def _run():
        agent = _agent([TimeoutError("slow"), TimeoutError("slow"), "recovered"], max_retries=2)
        return await agent.invoke("hello")

    assert asyncio.run(_run()) == "recovered"


def test_concurrent_invocations_are_serialized() -> None:
    """Turns of one agent never interleave in its memory."""

    async def _run():
        agent = _agent(["r1", "r2", "r3"])
        await asyncio.gather(agent.invoke("q1"), agent.invoke("q2"), agent.invoke("q3"))
        return await agent.memory.load()

    history = asyncio.run(_run())
    roles = [m.role for m in history]
    assert roles == ["user", "assistant"] * 3


def test_parse_tool_call_variants() -> None:
    call = parse_tool_call('  {"tool_call": {"name": "echo", "args": "hi"}}  ')
    assert call is not None
    assert (call.name, call.args) == ("echo", "hi")

    structured = parse_tool_call('{"tool_call": {"name": "search", "args": {"q": "x"}}}')
    assert structured is not None
    assert structured.args == '{"q": "x"}'

    assert parse_tool_call("just text") is None
    assert parse_tool_call('{"answer": 42}') is None
    assert parse_tool_call('{"tool_call": "echo"}') is None
    assert parse_tool_call("[1, 2]") is None
