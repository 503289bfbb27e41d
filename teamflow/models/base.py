"""Abstract async model interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import time
from typing import Any


@dataclass(slots=True)
class ChatMessage:
    """One entry of a conversation history."""

    role: str
    content: str


@dataclass(slots=True)
class ModelResponse:
    """Normalized model response payload."""

    text: str
    model_name: str
    input_tokens: int
    output_tokens: int
    latency_ms: float
    raw: dict[str, Any]


class BaseModelClient(ABC):
    """Base class for provider-specific async model clients."""

    provider: str = "base"

    def __init__(self, model_alias: str, api_model: str, dry_run: bool = False) -> None:
        self.model_alias = model_alias
        self.api_model = api_model
        self.dry_run = dry_run

    @abstractmethod
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
        """Generate one assistant reply asynchronously.

        ``history`` holds prior turns (oldest first) and is sent between the
        system prompt and the new user prompt.
        """

    async def close(self) -> None:
        """Optional resource cleanup hook."""
        return None

    def _mock_response(self, *, user_prompt: str) -> ModelResponse:
        """Deterministic offline reply used when ``dry_run`` is set."""
        started = time.perf_counter()
        words = user_prompt.split()[:40]
        text = "[DRY-RUN:{}] {}".format(self.model_alias, " ".join(words) or "empty prompt")
        return ModelResponse(
            text=text,
            model_name=self.model_alias,
            input_tokens=max(1, len(user_prompt) // 4),
            output_tokens=max(1, len(text) // 4),
            latency_ms=(time.perf_counter() - started) * 1000,
            raw={"dry_run": True},
        )
