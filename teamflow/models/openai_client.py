"""OpenAI chat-completions client adapter."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import os
import time
from typing import Any

from ..utils.rate_limiter import AsyncRateLimiter

from .base import BaseModelClient, ChatMessage, ModelResponse


@dataclass(slots=True)
class OpenAIClientConfig:
    """Configuration for OpenAI API calls."""

    timeout_seconds: int = 120
    rpm_limit: int = 60


class OpenAIModelClient(BaseModelClient):
    """Async wrapper around the OpenAI Python SDK using Chat Completions."""

    provider = "openai"
    _rate_limiter = AsyncRateLimiter()

    def __init__(
        self,
        model_alias: str,
        api_model: str,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        dry_run: bool = False,
        config: OpenAIClientConfig | None = None,
    ) -> None:
        super().__init__(model_alias=model_alias, api_model=api_model, dry_run=dry_run)
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.base_url = base_url or os.getenv("OPENAI_BASE_URL")
        self.config = config or OpenAIClientConfig()

        self._client: Any | None = None
        if not self.dry_run:
            if not self.api_key:
                raise ValueError("Missing OPENAI_API_KEY for non-dry run")
            self._init_client()

    def _init_client(self) -> None:
        try:
            from openai import AsyncOpenAI
        except ImportError as exc:
            raise RuntimeError("openai package is not installed") from exc

        kwargs: dict[str, Any] = {
            "api_key": self.api_key,
            "timeout": self.config.timeout_seconds,
        }
        if self.base_url:
            kwargs["base_url"] = self.base_url

        self._client = AsyncOpenAI(**kwargs)

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
            raise RuntimeError("OpenAI client not initialized")

        await self._rate_limiter.acquire(key=f"openai:{self.model_alias}", rpm=self.config.rpm_limit)

        messages = [{"role": "system", "content": system_prompt}]
        for msg in history or []:
            # Chat Completions has no "tool" turn without a tool_call_id.
            role = "assistant" if msg.role == "tool" else msg.role
            messages.append({"role": role, "content": msg.content})
        messages.append({"role": "user", "content": user_prompt})

        started = time.perf_counter()
        response = await self._client.chat.completions.create(
            model=self.api_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000

        text = (response.choices[0].message.content or "") if response.choices else ""
        usage = response.usage
        return ModelResponse(
            text=text.strip(),
            model_name=self.model_alias,
            input_tokens=int(getattr(usage, "prompt_tokens", 0) or 0),
            output_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
            latency_ms=elapsed_ms,
            raw={"id": getattr(response, "id", None)},
        )

    async def close(self) -> None:
        if self._client is None:
            await asyncio.sleep(0)
            return

        close_fn = getattr(self._client, "close", None)
        if close_fn is not None:
            maybe_coro = close_fn()
            if asyncio.iscoroutine(maybe_coro):
                await maybe_coro
