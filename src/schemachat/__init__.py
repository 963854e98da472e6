"""Schema-constrained chat completions over multiple LLM vendors."""

from .llm import (
    AzureOpenAIModel,
    Model,
    OpenAIModel,
    build_model,
    call_typed,
)

__all__ = [
    "AzureOpenAIModel",
    "Model",
    "OpenAIModel",
    "build_model",
    "call_typed",
]
