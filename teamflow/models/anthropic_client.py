"""Anthropic model client adapter."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import os
import time
from typing import Any

from .base import BaseModelClient, ChatMessage, ModelResponse


@dataclass(slots=True)
class AnthropicClientConfig:
    """Configuration for Anthropic API calls."""

    timeout_seconds: int = 60


def _to_turns(history: list[ChatMessage], user_prompt: str) -> list[dict[str, str]]:
    """Fold history into alternating user/assistant turns."""
    turns: list[dict[str, str]] = []
    for msg in [*history, ChatMessage(role="user", content=user_prompt)]:
        role = "user" if msg.role == "user" else "assistant"
        if turns and turns[-1]["role"] == role:
            turns[-1]["content"] += "\n\n" + msg.content
        else:
            turns.append({"role": role, "content": msg.content})
    if turns and turns[0]["role"] != "user":
        turns.insert(0, {"role": "user", "content": "(conversation resumed)"})
    return turns


class AnthropicModelClient(BaseModelClient):
    """Async wrapper around official anthropic SDK."""

    provider = "anthropic"

    def __init__(
        self,
        model_alias: str,
        api_model: str,
        api_key: str | None = None,
        *,
        dry_run: bool = False,
        config: AnthropicClientConfig | None = None,
    ) -> None:
        super().__init__(model_alias=model_alias, api_model=api_model, dry_run=dry_run)
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.config = config or AnthropicClientConfig()

        self._client: Any | None = None
        if not self.dry_run:
            if not self.api_key:
                raise ValueError("Missing ANTHROPIC_API_KEY for non-dry run")
            try:
                from anthropic import AsyncAnthropic
            except ImportError as exc:
                raise RuntimeError("anthropic package is not installed") from exc
            self._client = AsyncAnthropic(api_key=self.api_key, timeout=self.config.timeout_seconds)

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        history: list[ChatMessage] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ModelResponse:
        if self.dry_run:
            return self._mock_response(user_prompt=user_prompt)

        if self._client is None:
            raise RuntimeError("Anthropic client not initialized")

        started = time.perf_counter()
        response = await self._client.messages.create(
            model=self.api_model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=_to_turns(history or [], user_prompt),
        )
        elapsed_ms = (time.perf_counter() - started) * 1000

        text_chunks = []
        for chunk in response.content:
            if getattr(chunk, "type", None) == "text":
                text_chunks.append(chunk.text)

        usage = getattr(response, "usage", None)
        return ModelResponse(
            text="\n".join(text_chunks).strip(),
            model_name=self.model_alias,
            input_tokens=int(getattr(usage, "input_tokens", 0) or 0),
            output_tokens=int(getattr(usage, "output_tokens", 0) or 0),
            latency_ms=elapsed_ms,
            raw={"id": getattr(response, "id", None)},
        )

    async def close(self) -> None:
        # Official SDK currently does not require explicit closure.
        await asyncio.sleep(0)
