from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .errors import EmptyCompletionError
from .types import JsonSchema


@runtime_checkable
class Model(Protocol):
    """A vendor adapter answering a prompt with JSON shaped by `schema`."""

    def call(self, prompt: str, schema: JsonSchema) -> Any:
        raise NotImplementedError


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def completion_content(response: Any) -> str:
    """Return choices[0].message.content from an SDK object or a decoded dict."""

    choices = _field(response, "choices") or []
    if not choices:
        raise EmptyCompletionError()

    content = _field(_field(choices[0], "message"), "content")
    if content is None:
        raise EmptyCompletionError()
    return content
