from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import TypeAdapter

from ._json import classified_errors
from .base import Model

T = TypeVar("T")


def call_typed(model: Model, prompt: str, response_type: Type[T]) -> T:
    """Ask `model` for an answer and coerce it into `response_type`.

    The JSON Schema sent to the vendor is derived from the type with pydantic.
    A result that does not fit the type raises ModelResponseError, the same as
    unparseable JSON.
    """

    adapter: TypeAdapter[Any] = TypeAdapter(response_type)
    data = model.call(prompt, adapter.json_schema())
    with classified_errors():
        return adapter.validate_python(data)
