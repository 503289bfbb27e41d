"""Model selector resolution.

Agents name their model with a ``"<provider>:<api_model>"`` selector, e.g.
``"openai:gpt-4o-mini"`` or ``"anthropic:claude-3-5-haiku-latest"``. A bare
model name is treated as an OpenAI model.
"""

from __future__ import annotations

from dataclasses import dataclass

from .anthropic_client import AnthropicModelClient
from .base import BaseModelClient
from .openai_client import OpenAIModelClient


DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-3.5-turbo"

_PROVIDERS: dict[str, type[BaseModelClient]] = {
    "openai": OpenAIModelClient,
    "anthropic": AnthropicModelClient,
}


@dataclass(slots=True, frozen=True)
class ModelSelector:
    """Parsed ``provider:api_model`` pair."""

    provider: str
    api_model: str

    @property
    def alias(self) -> str:
        return f"{self.provider}:{self.api_model}"


def parse_model_selector(selector: str | None) -> ModelSelector:
    """Split a selector string into provider and API model name."""
    raw = (selector or "").strip()
    if not raw:
        return ModelSelector(provider=DEFAULT_PROVIDER, api_model=DEFAULT_MODEL)

    provider, sep, api_model = raw.partition(":")
    if not sep:
        return ModelSelector(provider=DEFAULT_PROVIDER, api_model=raw)

    provider = provider.strip().lower()
    api_model = api_model.strip() or DEFAULT_MODEL
    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown provider '{provider}' in model selector '{selector}'")
    return ModelSelector(provider=provider, api_model=api_model)


def create_client(selector: str | None, *, dry_run: bool = False) -> BaseModelClient:
    """Instantiate the provider client for ``selector``."""
    parsed = parse_model_selector(selector)
    client_cls = _PROVIDERS[parsed.provider]
    return client_cls(model_alias=parsed.alias, api_model=parsed.api_model, dry_run=dry_run)
