"""Model client adapters."""

from .anthropic_client import AnthropicModelClient
from .base import BaseModelClient, ChatMessage, ModelResponse
from .catalog import ModelSelector, create_client, parse_model_selector
from .openai_client import OpenAIModelClient

__all__ = [
    "BaseModelClient",
    "ChatMessage",
    "ModelResponse",
    "ModelSelector",
    "create_client",
    "parse_model_selector",
    "AnthropicModelClient",
    "OpenAIModelClient",
]
