"""Tests for built-in tools."""

from __future__ import annotations

import asyncio

import httpx

from teamflow.tools import EchoTool, MathTool, SearchTool, load_tools


def test_echo_tool() -> None:
    assert asyncio.run(EchoTool().call("ping")) == "Echo: ping"


def test_math_tool_evaluates_expressions() -> None:
    tool = MathTool()
    assert asyncio.run(tool.call("2 + 3 * 4")) == "Result: 14"
    assert asyncio.run(tool.call("10 / 4")) == "Result: 2.5"
    assert asyncio.run(tool.call("sqrt(16) + -1")) == "Result: 3"
    assert asyncio.run(tool.call("2 ** 10")) == "Result: 1024"


def test_math_tool_reports_errors() -> None:
    tool = MathTool()
    assert asyncio.run(tool.call("1 / 0")).startswith("Math error:")
    assert asyncio.run(tool.call("__import__('os')")).startswith("Math error:")
    assert asyncio.run(tool.call("2 +")).startswith("Math error:")
    assert asyncio.run(tool.call("9 ** 99999")).startswith("Math error:")


def _search_tool(handler) -> SearchTool:
    return SearchTool(transport=httpx.MockTransport(handler))


def test_search_tool_prefers_abstract() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "python"
        return httpx.Response(200, json={"AbstractText": "A programming language.", "RelatedTopics": []})

    assert asyncio.run(_search_tool(handler).call("python")) == "A programming language."


def test_search_tool_falls_back_to_related_topic() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"AbstractText": "", "RelatedTopics": [{"Name": "group"}, {"Text": "Rust"}]})

    assert asyncio.run(_search_tool(handler).call("rust")) == "Related: Rust"


def test_search_tool_handles_http_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    assert asyncio.run(_search_tool(handler).call("x")).startswith("Search error: request failed")
    assert asyncio.run(_search_tool(handler).call("   ")) == "Search error: empty query"


def test_load_tools_skips_unknown_names() -> None:
    tools = load_tools(["math", "teleport", "echo"])
    assert [tool.name for tool in tools] == ["math", "echo"]


def test_math_tool_rejects_oversized_powers() -> None:
    tool = MathTool()
    assert asyncio.run(tool.call("((9**999)**999)**999")) == "Math error: result is too large"
    assert asyncio.run(tool.call("9**999**999")).startswith("Math error:")
    assert asyncio.run(tool.call("2 ** 1000")).startswith("Result: 10715086")
